"""Version information for media-exif"""

__version__ = "1.0.0"
