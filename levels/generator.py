import random

from .models import Language, Level
from .templates import templates_for


def level_rng(seed, language: Language, level_id: int) -> random.Random:
    """Random source dedicated to one generated level.

    String seeds hash deterministically, so the same (seed, language, id)
    always rebuilds the same level no matter what was generated before it.
    """
    return random.Random(f"{seed}:{language.value}:{level_id}")


def generate_level(language: Language, level_id: int, rng: random.Random) -> Level:
    """Materialize one level from a uniformly drawn template."""
    template = rng.choice(templates_for(language))
    data = template.generate(rng)
    return Level(
        id=level_id,
        language=language,
        difficulty=template.difficulty,
        title=f"{template.title} #{level_id}",
        description=template.description,
        code=data["code"],
        bug_line=data["bug_line"],
        solution=data["solution"],
        explanation=data["explanation"],
    )
