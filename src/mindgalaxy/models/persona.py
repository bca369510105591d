"""Personas that react to a thought and spawn sparks."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Persona:
    """A thinker whose voice is used for spark reactions."""

    id: str
    name: str
    role: str
    avatar: str
    color: str  # Spark node color
    description: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "avatar": self.avatar,
            "color": self.color,
            "description": self.description,
        }


THINKERS: tuple[Persona, ...] = (
    Persona(
        id="jobs",
        name="Steve Jobs",
        role="The Visionary",
        avatar="",
        color="#d4d4d8",
        description="Direct. Brutal. Obsessed with simplicity.",
    ),
    Persona(
        id="feynman",
        name="Richard Feynman",
        role="The Explainer",
        avatar="⚛️",
        color="#a78bfa",
        description="Playful, curious. Nature is the ultimate truth.",
    ),
    Persona(
        id="jung",
        name="Carl Jung",
        role="The Analyst",
        avatar="🔮",
        color="#a78bfa",
        description="Look into the shadow. Integrate the unconscious.",
    ),
    Persona(
        id="kahlo",
        name="Frida Kahlo",
        role="The Artist",
        avatar="🌺",
        color="#fb7185",
        description="Raw, emotional, surreal.",
    ),
    Persona(
        id="musk",
        name="Elon Musk",
        role="The Engineer",
        avatar="🚀",
        color="#a78bfa",
        description="First principles thinker.",
    ),
)


def get_persona(persona_id: str) -> Persona | None:
    """Look up a thinker by id."""
    for persona in THINKERS:
        if persona.id == persona_id:
            return persona
    return None
