from dataclasses import dataclass


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: str = "destructive"
