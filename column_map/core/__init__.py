"""Core building blocks: annotations, codecs, introspection and exceptions."""
