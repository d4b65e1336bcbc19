"""Supabase Storage backed asset store."""

from dataclasses import dataclass
from pathlib import PurePath
from uuid import uuid4

from supabase import Client

from travel_buddy.services.travel_plans import AssetStore


@dataclass
class SupabaseAssetStore(AssetStore):
    """Stores plan images in a public Supabase Storage bucket."""

    client: Client
    bucket: str
    folder: str = "plans"

    def store(self, content: bytes, filename: str, content_type: str | None) -> str:
        """Upload the bytes under a unique key and return the public URL."""
        suffix = PurePath(filename).suffix.lower()
        path = f"{self.folder}/{uuid4().hex}{suffix}"
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(
            path,
            content,
            {"content-type": content_type or "application/octet-stream"},
        )
        return bucket.get_public_url(path)
