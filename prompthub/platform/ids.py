from typing import Annotated

from fastapi import Path, Query

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

ResourceId = Annotated[str, Path(pattern=UUID_PATTERN)]
OptionalResourceIdQuery = Annotated[str | None, Query(pattern=UUID_PATTERN)]
