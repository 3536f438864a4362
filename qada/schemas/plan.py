from datetime import date
from typing import Dict, Optional, Union
from pydantic import BaseModel, Field

from qada.models.ledger import Prayer


class PaceRequest(BaseModel):
    """Daily make-up pace; blank or non-numeric text counts as 0."""
    pace: Dict[Prayer, Optional[Union[int, str]]] = Field(default_factory=dict)
    today: Optional[date] = None
