"""GarageNote class for things noticed about a vehicle."""
import uuid
from typing import Any, Dict, List, Optional

from .mileage import timestamp_now

NOTE_CATEGORIES = ["heard", "saw", "felt", "smelled", "other"]

# Conditions recorded with a note: driving (bool), the rest free text
CONDITION_FIELDS = ["driving", "weather", "temperature", "fuelLevel"]


class GarageNote:
    """Something heard, seen, felt or smelled, kept until it is resolved."""

    def __init__(
            self,
            text: str,
            category: str = "other",
            date_noticed: Optional[str] = None,
            is_intermittent: bool = False,
            conditions: Optional[Dict[str, Any]] = None,
            resolved: bool = False,
            id: Optional[str] = None,
            created_at: Optional[str] = None,
            updated_at: Optional[str] = None,
    ):
        self.id = id
        self.text = text
        self.category = category
        self.date_noticed = date_noticed
        self.is_intermittent = is_intermittent
        self.conditions = conditions or {}
        self.resolved = resolved
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def conditions_summary(self) -> str:
        """Short description of the conditions, e.g. 'driving, rain, cold'."""
        parts = []
        if self.conditions.get("driving"):
            parts.append("driving")
        for key in CONDITION_FIELDS[1:]:
            value = self.conditions.get(key)
            if value:
                parts.append(str(value))
        if self.is_intermittent:
            parts.append("intermittent")
        return ", ".join(parts)


def create_garage_note(
    text: str,
    category: str = "other",
    date_noticed: Optional[str] = None,
    is_intermittent: bool = False,
    conditions: Optional[Dict[str, Any]] = None,
) -> GarageNote:
    """Create an open note with a fresh id and timestamps."""
    now = timestamp_now()
    return GarageNote(
        text=text.strip(),
        category=category,
        date_noticed=date_noticed,
        is_intermittent=is_intermittent,
        conditions={k: v for k, v in (conditions or {}).items() if v is not None},
        resolved=False,
        id=str(uuid.uuid4()),
        created_at=now,
        updated_at=now,
    )


def find_note(notes: List[GarageNote], note_id: str) -> Optional[GarageNote]:
    """Find a note by full id or by a unique id prefix."""
    for note in notes:
        if note.id == note_id:
            return note
    matches = [n for n in notes if n.id and note_id and n.id.startswith(note_id)]
    if len(matches) == 1:
        return matches[0]
    return None
