"""Virtual file systems over directories and zip archives, merged into one hierarchy."""

__version__ = "0.5.1"
__all__ = ["core", "physical", "overlay", "zipfs"]