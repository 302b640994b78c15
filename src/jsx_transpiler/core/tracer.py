"""
Transpilation Trace Logger.

Records the step-by-step execution of one transpile run:
1. Lifecycle Phases (Host Parse, Boundary Walk).
2. Fragment substitutions (markup source -> generated calls).
3. Display name injections.

The output is a structured list of event dictionaries suitable for JSON
serialization. A logger belongs to a single run; nothing is shared between runs.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  FRAGMENT = "fragment"
  AST_MUTATION = "ast_mutation"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records transpilation events for inspection.
  Injected into the detector and annotator by the engine.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase. Returns Phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None

    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_fragment(self, line: int, column: int, before: str, after: str) -> None:
    """Logs a markup fragment replaced by generated code."""
    self._log_simple(
      TraceEventType.FRAGMENT,
      f"Fragment at {line}:{column}",
      {"line": line, "column": column, "before": before, "after": after},
    )

  def log_mutation(self, node_type: str, before: str, after: str) -> None:
    """Logs a source rewrite outside markup."""
    self._log_simple(TraceEventType.AST_MUTATION, f"Transformed {node_type}", {"before": before, "after": after})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> None:
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
