from typing import Annotated

from pydantic import Field

from lpmath.constants import MAX_INT16

type ValidatedTickSpacing = Annotated[int, Field(strict=True, gt=0, le=MAX_INT16)]
