"""Domain layer: route table and domain registry.

Nothing here performs I/O; requests go through the client's transport.
"""
