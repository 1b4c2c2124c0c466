import json
from typing import List, Dict, Any, Optional


class RunLogger:
    """
    Collects per-event frames for replay/visualization.

    Frame schema (all optional except type/event/tick/pegs):
      {
        "type": "snapshot",
        "event": "create" | "move" | "rejected" | "solve" | "step" | "finished" | "win",
        "tick": int,              # move counter at the time of the event
        "note": str,
        "pegs": { "column1": [rank, ...], "column2": [...], "column3": [...] },
        "move": { "disk": int, "source": str, "destination": str },
        "solved": bool,
        "meta": { ... }
      }
    """

    def __init__(self):
        self.events: List[Dict[str, Any]] = []
        self._last_pegs: Optional[Dict[str, List[int]]] = None

    def snapshot(
        self,
        engine,
        event: str,
        note: str = "",
        move: Optional[Dict[str, Any]] = None,
        meta: Optional[Dict[str, Any]] = None,
    ):
        frame: Dict[str, Any] = {
            "type": "snapshot",
            "event": event,
            "note": note,
        }

        # Engine is optional so callers can log before a puzzle exists
        if engine is not None and engine.state is not None:
            frame["tick"] = engine.move_count
            frame["pegs"] = engine.state.as_dict()
            frame["solved"] = engine.solved
            self._last_pegs = dict(frame["pegs"])
        elif self._last_pegs is not None:
            frame["pegs"] = dict(self._last_pegs)

        if move is not None:
            frame["move"] = move
        if meta is not None:
            frame["meta"] = meta
        self.events.append(frame)
        return frame

    def by_event(self, event: str) -> List[Dict[str, Any]]:
        return [f for f in self.events if f.get("event") == event]

    def clear(self):
        self.events.clear()
        self._last_pegs = None

    def to_json(self, path: str):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.events, f, indent=2)
