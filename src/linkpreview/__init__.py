"""Link Preview Image Store Package."""

__version__ = "1.0.0"
__description__ = (
    "Pluggable image storage for link previews, backed by memory or S3-compatible object storage"
)

__all__ = ["handlers", "core"]
