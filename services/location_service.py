import httpx
import asyncio
from typing import List, Optional

from core.config import settings
from core.logger import get_logger
from schemas.ai_schema import CandidatePlace, Coordinates

logger = get_logger(__name__)

# Search radius in metres around the centre point
NEARBY_RADIUS_FROM_START = 3000
NEARBY_RADIUS_FROM_DESTINATION = 10000
GEOSEARCH_LIMIT = 50
DESCRIPTION_LENGTH = 200

async def get_coordinates(client: httpx.AsyncClient, destination: str) -> Optional[Coordinates]:
    """Geocodes a free-text destination with Nominatim. Returns None when nothing matches."""
    params = {
        'q': destination,
        'format': 'json',
        'limit': 1
    }
    try:
        response = await client.get(settings.NOMINATIM_URL, params=params)
        response.raise_for_status()
        data = response.json()
        if data:
            return Coordinates(lat=float(data[0]['lat']), lon=float(data[0]['lon']))
    except Exception as e:
        logger.warning("Error fetching coordinates for %s: %s", destination, e)
    return None

async def _geosearch(client: httpx.AsyncClient, coords: Coordinates, radius: int) -> List[dict]:
    params = {
        'action': 'query',
        'list': 'geosearch',
        'gscoord': f"{coords.lat}|{coords.lon}",
        'gsradius': radius,
        'gslimit': GEOSEARCH_LIMIT,
        'format': 'json'
    }
    response = await client.get(settings.WIKIPEDIA_API_URL, params=params)
    response.raise_for_status()
    return response.json().get('query', {}).get('geosearch', [])

async def _place_details(client: httpx.AsyncClient, hit: dict) -> Optional[CandidatePlace]:
    """Fetches the intro extract for one geosearch hit. Hits without an extract are dropped."""
    page_id = hit.get('pageid')
    params = {
        'action': 'query',
        'pageids': page_id,
        'prop': 'extracts|coordinates',
        'exintro': 'true',
        'explaintext': 'true',
        'format': 'json'
    }
    try:
        response = await client.get(settings.WIKIPEDIA_API_URL, params=params)
        response.raise_for_status()
        page = response.json().get('query', {}).get('pages', {}).get(str(page_id))
        if not page or not page.get('extract'):
            return None

        coordinates = None
        if hit.get('lat') is not None and hit.get('lon') is not None:
            coordinates = Coordinates(lat=hit['lat'], lon=hit['lon'])
        return CandidatePlace(
            title=hit['title'],
            description=page['extract'][:DESCRIPTION_LENGTH],
            coordinates=coordinates
        )
    except Exception as e:
        logger.warning("Error fetching place details for page %s: %s", page_id, e)
        return None

async def lookup_places(destination: str, interests: List[str],
                        origin_coords: Optional[Coordinates] = None) -> List[CandidatePlace]:
    """
    Finds points of interest around a destination.

    The destination is geocoded unless `origin_coords` is given, in which case
    the search is centred there with a tighter radius. Nearby Wikipedia pages
    are enriched with their intro text concurrently; the result keeps the
    geosearch order. Any failure yields an empty list.
    """
    logger.debug("Looking up places near %s (interests: %s)", destination, ", ".join(interests) or "any")
    headers = {'User-Agent': settings.LOOKUP_USER_AGENT}
    try:
        async with httpx.AsyncClient(headers=headers, timeout=settings.LOOKUP_TIMEOUT_SECONDS) as client:
            coords = origin_coords or await get_coordinates(client, destination)
            if not coords:
                return []

            radius = NEARBY_RADIUS_FROM_START if origin_coords else NEARBY_RADIUS_FROM_DESTINATION
            hits = await _geosearch(client, coords, radius)
            hits = hits[:settings.LOOKUP_MAX_PLACES]

            details = await asyncio.gather(*(_place_details(client, hit) for hit in hits))
    except Exception as e:
        logger.warning("Error fetching nearby places for %s: %s", destination, e)
        return []

    places = [place for place in details if place is not None]
    logger.info("Found %d candidate places near %s", len(places), destination)
    return places
