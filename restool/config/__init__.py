"""
config handles loading service configuration from the file system and
compiling it into models.
"""
