import enum
from dataclasses import dataclass, field
from typing import Any


class Category(str, enum.Enum):
    SIMPLE_CONCENTRATED = "simple-concentrated"
    SIMPLE_DISTRIBUTED = "simple-distributed"
    CANTILEVER_CONCENTRATED = "cantilever-concentrated"
    CANTILEVER_DISTRIBUTED = "cantilever-distributed"
    OVERHANG_CONCENTRATED = "overhang-concentrated"
    OVERHANG_DISTRIBUTED = "overhang-distributed"
    SECTION_PROPERTIES = "section-properties"
    BENDING_STRESS = "bending-stress"
    BUCKLING = "buckling"
    TRUSS_ZERO = "truss-zero"
    TRUSS_CALCULATION = "truss-calculation"
    FRAME = "frame"
    DEFLECTION = "deflection"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.SIMPLE_CONCENTRATED: "Simple beam, point load",
    Category.SIMPLE_DISTRIBUTED: "Simple beam, distributed load",
    Category.CANTILEVER_CONCENTRATED: "Cantilever, point load",
    Category.CANTILEVER_DISTRIBUTED: "Cantilever, distributed load",
    Category.OVERHANG_CONCENTRATED: "Overhanging beam, point load",
    Category.OVERHANG_DISTRIBUTED: "Overhanging beam, distributed load",
    Category.SECTION_PROPERTIES: "Section properties",
    Category.BENDING_STRESS: "Bending and combined stress",
    Category.BUCKLING: "Buckling",
    Category.TRUSS_ZERO: "Truss: zero-force members",
    Category.TRUSS_CALCULATION: "Truss: member forces",
    Category.FRAME: "Three-hinged frame",
    Category.DEFLECTION: "Deflection",
}


class Difficulty(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    MIXED = "mixed"  # resolved to a concrete tier by the dispatcher


class Target(str, enum.Enum):
    M_MAX = "M_max"
    VA = "Va"
    VB = "Vb"
    M_AT_X = "M_at_x"
    Q_AT_X = "Q_at_x"
    Z = "Z"
    I = "I"
    I_CENTROID = "I_centroid"
    X_G = "x_g"
    Y_G = "y_g"
    SIGMA = "sigma"
    TAU = "tau"
    E_MAX = "e_max"
    AXIAL_FORCE = "N"
    LK = "l_k"
    P_RATIO = "P_ratio"
    DEFLECTION_RATIO = "delta_ratio"
    FRAME_M_LEFT = "frame_M_left"
    FRAME_H_LEFT = "frame_H_left"
    FRAME_V_B = "frame_V_B"


TARGET_UNITS = {
    Target.M_MAX: "kN·m",
    Target.VA: "kN",
    Target.VB: "kN",
    Target.M_AT_X: "kN·m",
    Target.Q_AT_X: "kN",
    Target.Z: "mm³",
    Target.I: "mm⁴",
    Target.I_CENTROID: "mm⁴",
    Target.X_G: "mm",
    Target.Y_G: "mm",
    Target.SIGMA: "N/mm²",
    Target.TAU: "N/mm²",
    Target.E_MAX: "mm",
    Target.AXIAL_FORCE: "kN",
    Target.LK: "m",
    Target.P_RATIO: "x",
    Target.DEFLECTION_RATIO: "x",
    Target.FRAME_M_LEFT: "kN·m",
    Target.FRAME_H_LEFT: "kN",
    Target.FRAME_V_B: "kN",
}

# Grading tolerances
BEAM_TOLERANCE = 0.01
SECTION_TOLERANCE = 1e-6
RATIO_TOLERANCE = 0.001

CATEGORY_TOLERANCES = {
    Category.SECTION_PROPERTIES: SECTION_TOLERANCE,
    Category.BENDING_STRESS: SECTION_TOLERANCE,
    Category.DEFLECTION: RATIO_TOLERANCE,
}


def tolerance_for(category: Category) -> float:
    return CATEGORY_TOLERANCES.get(category, BEAM_TOLERANCE)


def _clean_number(value: float) -> float | int:
    """Render integral floats as ints so JSON reads 648000 rather than 648000.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass
class Problem:
    """One generated multiple-choice problem."""
    category: Category
    difficulty: Difficulty
    target: Target
    answer: float
    choices: list[float]
    question: str
    explanation: str
    params: dict[str, float] = field(default_factory=dict)
    pattern: str | None = None
    display: dict[str, Any] = field(default_factory=dict)
    tolerance: float = BEAM_TOLERANCE

    @property
    def unit(self) -> str:
        return TARGET_UNITS[self.target]

    def is_correct(self, selected: float) -> bool:
        return abs(selected - self.answer) < self.tolerance

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "category_label": self.category.label,
            "pattern": self.pattern,
            "difficulty": self.difficulty.value,
            "target": self.target.value,
            "unit": self.unit,
            "question": self.question,
            "params": {k: _clean_number(v) for k, v in self.params.items()},
            "answer": _clean_number(self.answer),
            "choices": [_clean_number(c) for c in self.choices],
            "explanation": self.explanation,
            "display": self.display,
            "tolerance": self.tolerance,
        }


@dataclass(frozen=True)
class CategoryStats:
    """Per-category answer counts supplied by the caller's history store."""
    attempted: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct / self.attempted if self.attempted else 0.0
