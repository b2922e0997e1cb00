"""
Declarative route table: which paths exist and how each one is guarded.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .roles import Role


def _split(path: str) -> Tuple[str, ...]:
    return tuple(part for part in path.strip().split("/") if part)


@dataclass(frozen=True)
class RouteRule:
    """
    A navigable path pattern and its guard configuration.

    Segments starting with ``:`` match any single path segment
    (``/agendar/:slug`` matches ``/agendar/bella-vista``).
    """
    pattern: str
    allowed_roles: Optional[FrozenSet[Role]] = None
    require_auth: bool = True
    name: str = ""
    _segments: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.pattern.startswith("/"):
            raise ValueError(f"Route pattern must start with '/', got {self.pattern!r}")
        object.__setattr__(self, "_segments", _split(self.pattern))

    def matches(self, path: str) -> bool:
        """Check whether a concrete path matches this rule's pattern."""
        parts = _split(path.split("?", 1)[0])
        if len(parts) != len(self._segments):
            return False
        return all(
            expected.startswith(":") or expected == actual
            for expected, actual in zip(self._segments, parts)
        )


def _rule(pattern: str, name: str, *roles: Role) -> RouteRule:
    return RouteRule(pattern=pattern, allowed_roles=frozenset(roles), name=name)


def _public(pattern: str, name: str) -> RouteRule:
    return RouteRule(pattern=pattern, require_auth=False, name=name)


DEFAULT_ROUTES: Tuple[RouteRule, ...] = (
    _public("/", "Início"),
    _public("/login", "Login"),
    _public("/cadastro", "Cadastro"),
    _public("/agendar/:slug", "Página do negócio"),
    # Platform admin
    _rule("/admin/dashboard", "Painel admin", Role.SAAS_ADMIN),
    _rule("/admin/negocios", "Negócios", Role.SAAS_ADMIN),
    _rule("/admin/usuarios", "Usuários", Role.SAAS_ADMIN),
    _rule("/admin/planos", "Planos", Role.SAAS_ADMIN),
    _rule("/admin/relatorios", "Relatórios", Role.SAAS_ADMIN),
    _rule("/admin/configuracoes", "Configurações", Role.SAAS_ADMIN),
    # Business owner
    _rule("/negocio/dashboard", "Painel do negócio", Role.BUSINESS_OWNER),
    _rule("/negocio/servicos", "Serviços", Role.BUSINESS_OWNER),
    _rule("/negocio/categorias", "Categorias", Role.BUSINESS_OWNER),
    _rule("/negocio/profissionais", "Profissionais", Role.BUSINESS_OWNER),
    _rule("/negocio/agendamentos", "Agendamentos", Role.BUSINESS_OWNER),
    _rule("/negocio/lojas", "Lojas", Role.BUSINESS_OWNER),
    _rule("/negocio/landing", "Landing page", Role.BUSINESS_OWNER),
    _rule("/negocio/relatorios", "Relatórios", Role.BUSINESS_OWNER),
    _rule("/negocio/configuracoes", "Configurações", Role.BUSINESS_OWNER),
    # Professional
    _rule("/profissional/dashboard", "Agenda", Role.PROFESSIONAL),
    _rule("/profissional/historico", "Histórico", Role.PROFESSIONAL),
    _rule("/profissional/indisponibilidades", "Indisponibilidades", Role.PROFESSIONAL),
    _rule("/profissional/perfil", "Perfil", Role.PROFESSIONAL),
)


class RouteTable:
    """Ordered collection of route rules; the first matching rule wins."""

    def __init__(self, rules: Iterable[RouteRule] = DEFAULT_ROUTES):
        self._rules: List[RouteRule] = list(rules)

    def __iter__(self) -> Iterator[RouteRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def match(self, path: str) -> RouteRule | None:
        """Return the rule guarding ``path``, or None when nothing matches."""
        for rule in self._rules:
            if rule.matches(path):
                return rule
        return None
