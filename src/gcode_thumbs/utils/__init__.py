"""Small helpers shared across gcode_thumbs modules."""
