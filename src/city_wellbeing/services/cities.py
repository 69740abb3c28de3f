"""City resolution backed by GeoDB."""

from dataclasses import dataclass

from city_wellbeing.adapters.geodb_client import GeoDbClient
from city_wellbeing.domain.errors import NotFoundError, UpstreamError, ValidationError
from city_wellbeing.domain.locations import Location


@dataclass
class CityResolver:
    """Turns a free-text city name into a canonical location."""

    client: GeoDbClient

    async def resolve(self, city_name: str) -> Location:
        """Return the most populous city matching the name.

        Raises NotFoundError when GeoDB has no match and UpstreamError when
        the lookup itself fails.
        """
        if not city_name or not city_name.strip():
            raise ValidationError("City parameter is required.")
        try:
            payload = await self.client.find_cities(city_name, limit=1)
        except Exception as exc:
            raise UpstreamError(f"GeoDB Error: {exc}") from exc

        if not isinstance(payload, dict):
            raise UpstreamError("GeoDB Error: unexpected response payload")
        matches = payload.get("data") or []
        if not isinstance(matches, list) or not matches:
            raise NotFoundError("City not found via GeoDB.")
        city = matches[0]
        try:
            return Location(
                city=city["name"],
                country=city["country"],
                latitude=float(city["latitude"]),
                longitude=float(city["longitude"]),
                population=int(city.get("population") or 0),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(f"GeoDB Error: malformed city payload ({exc})") from exc
