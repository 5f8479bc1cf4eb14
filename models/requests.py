from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class DetectViolationsBody(BaseModel):
    """JSON body accepted by the detection endpoint."""

    model_config = ConfigDict(extra="ignore")

    imageUrl: Optional[StrictStr] = None
    videoUrl: Optional[StrictStr] = None
