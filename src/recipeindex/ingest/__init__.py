"""External collaborators used while ingesting recipes."""

from recipeindex.ingest.outcome import Fallback, Ok, Outcome

__all__ = [
    "Fallback",
    "Ok",
    "Outcome",
]
