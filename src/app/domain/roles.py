"""Papéis de atendimento e ordem de privilégio.

O conjunto de papéis é fechado: todo roteamento, autorização e registro de
handlers usa este enum, nunca strings soltas.
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Papéis que podem receber uma mensagem.

    - CUSTOMER: papel aberto (padrão), liberado para qualquer remetente
    - STAFF: papel restrito, exige registro de autorização ativo
    - ADMIN: papel restrito de maior privilégio
    """

    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value

    @property
    def is_open(self) -> bool:
        """True para o papel aberto (não exige registro)."""
        return self is OPEN_ROLE

    @property
    def privilege(self) -> int:
        """Nível de privilégio (maior = mais privilegiado)."""
        return _PRIVILEGE[self]

    def outranks(self, other: Role) -> bool:
        """Retorna True se este papel é estritamente mais privilegiado."""
        return self.privilege > other.privilege


_PRIVILEGE: dict[Role, int] = {
    Role.CUSTOMER: 0,
    Role.STAFF: 10,
    Role.ADMIN: 20,
}

# Papel padrão para qualquer remetente sem registro
OPEN_ROLE: Role = Role.CUSTOMER

# Papéis restritos do mais para o menos privilegiado (ordem de resolução)
RESTRICTED_ROLES_BY_PRIORITY: tuple[Role, ...] = tuple(
    sorted(
        (role for role in Role if role is not OPEN_ROLE),
        key=lambda role: role.privilege,
        reverse=True,
    )
)

# Papel de maior privilégio
TOP_ROLE: Role = max(Role, key=lambda role: role.privilege)


def parse_role(value: str) -> Role | None:
    """Converte string em Role (case-insensitive).

    Returns:
        Role correspondente ou None se desconhecido.
    """
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None
