import logging

from metadata.providers.base import EnrichmentProvider
from metadata.types import EnrichmentResult, ImageRef
from spotify.client import EnrichmentError, SpotifyAlbumSearchClient

logger = logging.getLogger(__name__)


def _first_image(item):
    for img in item.get("images") or []:
        if isinstance(img, dict) and img.get("url"):
            return ImageRef(url=img.get("url"), width=img.get("width"), height=img.get("height"))
    return None


def enrichment_from_album(item):
    artist_names = tuple(
        str(entry.get("name")).strip()
        for entry in item.get("artists") or []
        if isinstance(entry, dict) and str(entry.get("name") or "").strip()
    )
    popularity = item.get("popularity")
    return EnrichmentResult(
        artist_names=artist_names,
        preview_image=_first_image(item),
        album_name=item.get("name"),
        popularity=popularity if isinstance(popularity, int) else None,
    )


class SpotifyAlbumEnricher(EnrichmentProvider):
    def __init__(self, client=None, *, access_token=None):
        self.client = client or SpotifyAlbumSearchClient(access_token=access_token)

    def enrich(self, query):
        if not self.client.has_credentials():
            logger.debug("Spotify enrichment skipped for query=%r: no access token", query)
            return None
        try:
            items = self.client.search_albums(query)
        except EnrichmentError as exc:
            logger.warning("Spotify enrichment failed for query=%r: %s", query, exc)
            return None
        except Exception:
            logger.exception("Spotify enrichment failed for query=%r", query)
            return None
        if not items:
            logger.info("Spotify returned no albums for query=%r", query)
            return None
        result = enrichment_from_album(items[0])
        logger.info(
            "Spotify album for query=%r name=%r artists=%s",
            query,
            result.album_name,
            ", ".join(result.artist_names) or "-",
        )
        return result
