"""Folder Share: browser file manager confined to a single storage root."""
