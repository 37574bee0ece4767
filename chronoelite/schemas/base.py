"""Base struct shared by the catalog schemas."""

from typing import Any

import msgspec


class BaseStruct(msgspec.Struct):
    """Struct with a shallow ``dict`` view."""

    def to_dict(self) -> dict[str, Any]:
        """Field values by name, leaving out unset fields."""
        return {name: value for name, value in msgspec.structs.asdict(self).items() if value is not msgspec.UNSET}
