from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Literals used when turning raw environment strings into values."""

    separator: str = ","
    true_literal: str = "true"

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must be a non-empty string")
        if not self.true_literal:
            raise ValueError("true_literal must be a non-empty string")
