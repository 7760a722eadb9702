import time
from typing import Any, List
from loguru import logger
from halalmatch.models import AuthorityEntry
from halalmatch.clients import RegisterClient

REQUIRED_FIELDS = ("name", "postal", "number")


class RegisterLoadError(Exception):
    """Raised when the register payload cannot be turned into authority entries."""


def _field(item: dict, key: str) -> str:
    value = item.get(key)
    return "" if value is None else str(value).strip()


def parse_register(payload: Any) -> List[AuthorityEntry]:
    """
    Convert a decoded register payload into authority entries.

    Args:
        payload (Any): Decoded JSON body. Expected to be a list of objects, each
                       carrying at least `name`, `postal` and `number`.

    Returns:
        List[AuthorityEntry]: Entries in payload order.

    Raises:
        RegisterLoadError: If the payload is not a list, or any element is not an
                           object carrying the required fields.
    """
    if not isinstance(payload, list):
        raise RegisterLoadError(f"Expected a JSON array, got {type(payload).__name__}")

    entries = []
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise RegisterLoadError(f"Register element {idx} is {type(item).__name__}, not an object")
        missing = [key for key in REQUIRED_FIELDS if key not in item]
        if missing:
            raise RegisterLoadError(f"Register element {idx} is missing {', '.join(missing)}")

        entries.append(AuthorityEntry(
            name=_field(item, "name"),
            postal_code=_field(item, "postal"),
            certificate_number=_field(item, "number"),
            address=item.get("address"),
        ))
    return entries


async def fetch_authority_entries(client: RegisterClient) -> List[AuthorityEntry]:
    """
    Fetch the whole register and parse it into authority entries.

    Args:
        client (RegisterClient): Client pointed at the register source.

    Returns:
        List[AuthorityEntry]: The full authority dataset.

    Raises:
        RegisterLoadError: On a malformed payload. Network errors propagate from the client.
    """
    start = time.perf_counter()
    payload = await client.fetch_register()
    entries = parse_register(payload)
    duration = time.perf_counter() - start
    logger.debug(f"✅ Fetched {len(entries)} register entries in {duration:.2f}s")
    return entries
