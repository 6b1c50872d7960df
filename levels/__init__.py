from .catalog import DEFAULT_SEED, find_level, first_level, levels_for, next_level
from .data import GENERATED_ID_OFFSET, HAND_AUTHORED_LEVELS, LEVEL_QUOTA
from .generator import generate_level, level_rng
from .models import Difficulty, Language, Level
from .templates import FALLBACK_LANGUAGE, TEMPLATES, BugTemplate, templates_for
