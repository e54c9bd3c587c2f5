from dataclasses import dataclass


@dataclass(frozen=True)
class Author:
    last_name: str
    first_name: str | None = None

    @property
    def display_name(self) -> str:
        if self.first_name:
            return f"{self.first_name} {self.last_name}"
        return self.last_name


def parse_authors(block: str) -> list[Author]:
    """One author per line, ``First Last`` or ``Last``.

    Tokens after the second one are dropped, so ``Juan de la Cruz`` becomes
    first name ``Juan`` and last name ``de``.
    """
    authors: list[Author] = []
    for line in block.replace("\r\n", "\n").split("\n"):
        tokens = line.strip().split()
        if not tokens:
            continue
        if len(tokens) == 1:
            authors.append(Author(last_name=tokens[0]))
        else:
            authors.append(Author(first_name=tokens[0], last_name=tokens[1]))
    return authors
