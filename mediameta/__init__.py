"""
mediameta
---------
Metadata reconciliation for media archives.

Decides which source may overwrite each descriptive field of a media item
(title, description, capture time, coordinates) and derives titles,
keyword indexes and label associations from embedded metadata, geocoding,
image classification and manual edits.
"""

__version__ = "0.3.0"
