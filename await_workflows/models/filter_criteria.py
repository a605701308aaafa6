"""
Filter Criteria Model
Immutable identity and name rules applied to every fetched run list.
"""
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


class FilterCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_commit: str
    self_id: Optional[Union[int, str]] = None   # None outside a workflow run
    include_names: Tuple[str, ...] = ()
    exclude_names: Tuple[str, ...] = ()
