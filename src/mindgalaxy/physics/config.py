"""Configuration for the force-directed layout."""

from dataclasses import asdict, dataclass, fields, replace

from mindgalaxy.config import Settings, settings

# Fields the UI may tune while the simulation runs
TUNABLE_FIELDS = ("repulsion", "spring_length", "stiffness", "damping", "center_gravity")


@dataclass(frozen=True)
class PhysicsConfig:
    """Force solver parameters, read once at the top of every step."""

    repulsion: float = 5000.0  # Inverse-square push between all pairs
    spring_length: float = 40.0  # Node diameter; spring targets scale from it
    stiffness: float = 0.3
    damping: float = 0.88  # Velocity multiplier per step
    center_gravity: float = 0.0005  # Linear pull toward the origin

    # Spring target = spring_length * (min_mult + (max_mult - min_mult) * (1 - w)^2)
    min_mult: float = 0.3  # w = 1 -> nearly touching
    max_mult: float = 3.0  # w -> 0 -> three diameters apart

    max_force: float = 20.0  # Clamp for both spring and repulsion magnitudes
    sleep_speed: float = 0.02
    repulsion_cutoff_sq: float = 1_000_000.0

    # Forces above these wake a sleeping endpoint
    spring_wake_force: float = 0.1
    repulsion_wake_force: float = 0.05

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")
        if not 0.0 < self.damping < 1.0:
            raise ValueError(f"damping must be in (0, 1), got {self.damping}")
        if self.max_mult < self.min_mult:
            raise ValueError("max_mult must be >= min_mult")

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "PhysicsConfig":
        s = s or settings
        return cls(
            repulsion=s.physics_repulsion,
            spring_length=s.physics_spring_length,
            stiffness=s.physics_stiffness,
            damping=s.physics_damping,
            center_gravity=s.physics_center_gravity,
            sleep_speed=s.physics_sleep_speed,
            repulsion_cutoff_sq=s.physics_repulsion_cutoff_sq,
        )

    def updated(self, **changes: float) -> "PhysicsConfig":
        """Copy with some fields replaced (validated)."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown physics fields: {sorted(unknown)}")
        return replace(self, **changes)

    def spring_target(self, weight: float) -> float:
        """Rest length for a connection of the given weight."""
        slack = (1.0 - weight) ** 2
        return self.spring_length * (self.min_mult + (self.max_mult - self.min_mult) * slack)

    def to_dict(self) -> dict:
        return asdict(self)
