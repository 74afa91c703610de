"""Catalog and library resource shapes.

Each resource narrows the generic ``Resource`` to typed attributes and
relationships; field names follow the service's camelCase keys.
"""

from __future__ import annotations

from pydantic import Field

from .models import CatalogModel, Relationship, Resource


class Artwork(CatalogModel):
    """Artwork image with a ``{w}x{h}`` templated URL."""

    url: str | None = None
    width: int | None = None
    height: int | None = None
    bg_color: str | None = None
    text_color1: str | None = None
    text_color2: str | None = None
    text_color3: str | None = None
    text_color4: str | None = None

    def image_url(self, width: int, height: int) -> str | None:
        """Expand the URL template for the requested size."""
        if self.url is None:
            return None
        return self.url.replace("{w}", str(width)).replace("{h}", str(height))


class EditorialNotes(CatalogModel):
    standard: str | None = None
    short: str | None = None


class Preview(CatalogModel):
    """Audio or video preview of a resource."""

    url: str | None = None
    artwork: Artwork | None = None


class StorefrontAttributes(CatalogModel):
    name: str | None = None
    storefront_id: int | None = None
    supported_language_tags: list[str] = Field(default_factory=list)
    default_language_tag: str | None = None


class Storefront(Resource):
    """A store territory, identified by its two-letter code."""

    attributes: StorefrontAttributes | None = None  # type: ignore[assignment]
    type: str | None = "storefronts"


class PlaylistReference(Resource):
    """Playlist referenced from another resource's relationships."""

    type: str | None = "playlists"


class ActivityAttributes(CatalogModel):
    artwork: Artwork | None = None
    editorial_notes: EditorialNotes | None = None
    name: str | None = None
    url: str | None = None


class ActivityRelationships(CatalogModel):
    playlists: Relationship[PlaylistReference] | None = None


class Activity(Resource):
    """An activity, such as a workout or party, with curated playlists."""

    attributes: ActivityAttributes | None = None  # type: ignore[assignment]
    relationships: ActivityRelationships | None = None  # type: ignore[assignment]
    type: str | None = "activities"

    @property
    def playlists(self) -> list[PlaylistReference]:
        """Playlists related to this activity."""
        if self.relationships is None or self.relationships.playlists is None:
            return []
        return self.relationships.playlists.data


class LibraryAlbumReference(Resource):
    type: str | None = "library-albums"


class LibraryArtistAttributes(CatalogModel):
    name: str = ""


class LibraryArtistRelationships(CatalogModel):
    # Only present when a single library artist is fetched by id
    albums: Relationship[LibraryAlbumReference] | None = None


class LibraryArtist(Resource):
    """An artist in the user's cloud library."""

    attributes: LibraryArtistAttributes | None = None  # type: ignore[assignment]
    relationships: LibraryArtistRelationships | None = None  # type: ignore[assignment]
    type: str | None = "library-artists"
