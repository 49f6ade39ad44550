from dataclasses import dataclass, field
from typing import Dict, Any, Literal, TYPE_CHECKING

if TYPE_CHECKING:
    from .solver import Solver

EventName = Literal["optimize_begin", "optimize_end", "iteration_done"]

@dataclass
class Event:
    name: EventName
    solver: 'Solver'
    payload: Dict[str, Any] = field(default_factory=dict)
