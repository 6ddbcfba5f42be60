"""Core release machinery: registry, context, templating, digests, checksums."""
