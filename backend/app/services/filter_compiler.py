"""
Compile a GameFilter into a parameterized SQL predicate.

The compiled predicate is shared verbatim by the page query and the count
query, so both always see the same rows. Placeholders are SQLAlchemy named
binds (`:p1`, `:p2`, ...) numbered in the order their clauses were added.
"""
from typing import Any, Iterable, NamedTuple, Tuple

from ..models.game_filter import GameFilter
from ..models.game_record import ADULT_AGE_RATINGS
from ..utils.query_helpers import escape_like, param_name, placeholder

BASE_PARAM_COUNT = 4

SEARCH_TEMPLATE = (
    "(title ILIKE '%' || {0} || '%' OR developer ILIKE '%' || {0} || '%'"
    " OR publisher ILIKE '%' || {0} || '%')"
)
ADULT_ONLY_CLAUSE = "age_rating IN ({})".format(
    ", ".join(f"'{rating.value}'" for rating in ADULT_AGE_RATINGS)
)


class Clause(NamedTuple):
    """A predicate fragment and the value bound to its `{0}` slot, if any."""
    template: str
    value: Any = None
    bound: bool = True

    @classmethod
    def literal(cls, text: str) -> "Clause":
        return cls(text, None, False)


class CompiledFilter(NamedTuple):
    clauses: Tuple[Clause, ...]
    predicate: str
    params: Tuple[Any, ...]

    @property
    def extra_params(self) -> Tuple[Any, ...]:
        """Values bound after the four base parameters (platform, then genres)."""
        return self.params[BASE_PARAM_COUNT:]

    @property
    def next_position(self) -> int:
        return len(self.params) + 1

    def bind(self, *trailing: Any) -> dict[str, Any]:
        """Bind mapping for the predicate, with `trailing` values at the next positions."""
        values = self.params + trailing
        return {param_name(i): value for i, value in enumerate(values, start=1)}


def render(clauses: Iterable[Clause]) -> CompiledFilter:
    """Number placeholders in clause order and join the fragments with AND."""
    clauses = tuple(clauses)
    fragments = []
    params = []
    for clause in clauses:
        if clause.bound:
            params.append(clause.value)
            fragments.append(clause.template.format(placeholder(len(params))))
        else:
            fragments.append(clause.template)
    return CompiledFilter(clauses=clauses, predicate=" AND ".join(fragments), params=tuple(params))


def base_clauses(game_filter: GameFilter) -> list[Clause]:
    """The four conditions every listing carries, in fixed parameter order."""
    return [
        Clause("price > {0}", game_filter.price_min),
        Clause("price < {0}", game_filter.price_max),
        Clause("rating >= {0}", game_filter.rating_min),
        Clause(SEARCH_TEMPLATE, escape_like(game_filter.search_term)),
    ]


def compile_filter(game_filter: GameFilter) -> CompiledFilter:
    clauses = base_clauses(game_filter)

    if game_filter.adult_only is True:
        clauses.append(Clause.literal(ADULT_ONLY_CLAUSE))

    if game_filter.platform:
        clauses.append(Clause("{0} = ANY(platforms)", game_filter.platform))

    if game_filter.genres:
        clauses.append(Clause("genres @> {0}", list(game_filter.genres)))

    return render(clauses)


# Predicate for a filter with no optional clauses.
BASE_PREDICATE = render(base_clauses(GameFilter())).predicate
