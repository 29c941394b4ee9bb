"""WeddingSeatingPlan package."""
from .models import (
    Guest,
    Couple,
    Exclusion,
    Table,
    SortingCriteria,
    PlanConfiguration,
    PlanWarning,
    DecisionEvent,
    ValidationResult,
    SeatingPlanResult,
)
from .csv_loader import (
    load_guests,
    load_couples,
    load_exclusions,
    load_all,
    pad_guests,
)
from .relationships import RelationshipResolver, couple_connected_groups
from .validation import validate
from .sequencer import is_auto_generated_name, sequence_guests
from .solver import PlacementEngine, generate, shuffle_tables
from .checks import check_plan, move_guest

__all__ = [
    "Guest",
    "Couple",
    "Exclusion",
    "Table",
    "SortingCriteria",
    "PlanConfiguration",
    "PlanWarning",
    "DecisionEvent",
    "ValidationResult",
    "SeatingPlanResult",
    "load_guests",
    "load_couples",
    "load_exclusions",
    "load_all",
    "pad_guests",
    "RelationshipResolver",
    "couple_connected_groups",
    "validate",
    "is_auto_generated_name",
    "sequence_guests",
    "PlacementEngine",
    "generate",
    "shuffle_tables",
    "check_plan",
    "move_guest",
]
