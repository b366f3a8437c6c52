"""Respostas dos handlers padrão por papel (correspondência por palavra-chave).

Cada regra casa quando o texto (minúsculo) contém ao menos um termo de
any_of e todos os termos de all_of. A primeira regra que casa vence; a
ordem das tuplas é a ordem de avaliação.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.response import ActionTag


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Regra de resposta fixa.

    Atributos:
        key: Identificador interno da regra (usado em logs).
        any_of: Termos alternativos (vazio = não exige nenhum).
        reply: Texto de resposta.
        actions: Ações pedidas ao Delivery Executor.
        all_of: Termos obrigatórios adicionais.
    """

    key: str
    any_of: tuple[str, ...]
    reply: str
    actions: tuple[ActionTag, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if self.any_of and not any(term in text for term in self.any_of):
            return False
        return all(term in text for term in self.all_of)


def match_rule(text: str, rules: tuple[KeywordRule, ...]) -> KeywordRule | None:
    """Primeira regra que casa com o texto (comparação case-insensitive)."""
    lowered = (text or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule
    return None


# ──────────────────────────────────────────────────────────────
# Customer
# ──────────────────────────────────────────────────────────────

CUSTOMER_GREETING = (
    "Thank you for your message. How can I assist you today? You can ask about "
    "your order status, report an issue, or get help with our products."
)

CUSTOMER_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        key="order_status",
        any_of=("order status",),
        reply=(
            "I'll check your recent order status for you. You will receive the "
            "details of your latest orders shortly."
        ),
    ),
    KeywordRule(
        key="help",
        any_of=("help",),
        reply=(
            "I'm here to help! You can ask me about:\n"
            "1. Your order status\n"
            "2. Product information\n"
            "3. Reporting issues with your order\n"
            "4. Delivery information\n\n"
            "Just let me know what you need assistance with."
        ),
    ),
    KeywordRule(
        key="issue_report",
        any_of=("issue", "problem"),
        reply=(
            "I'm sorry to hear you're experiencing an issue. I've logged this report "
            "and our team will look into it. Could you please provide more details "
            "about the problem you're facing?"
        ),
        actions=(ActionTag.NOTIFY_EMAIL,),
    ),
)

# ──────────────────────────────────────────────────────────────
# Staff
# ──────────────────────────────────────────────────────────────

STAFF_MENU = (
    "Hello staff member. You can send me:\n"
    "1. Package label images for processing\n"
    '2. "Stock take" messages to update inventory\n'
    '3. "New product" details to add to inventory\n'
    '4. "Order update" to change order status'
)

STAFF_MEDIA_REPLY = (
    "I've received the package label image and queued it for processing. "
    "You will get the extracted order details in this chat."
)

STAFF_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        key="stock_take",
        any_of=("stock take",),
        reply="I've recorded your stock take. Inventory will be updated accordingly.",
    ),
    KeywordRule(
        key="new_product",
        any_of=("new product",),
        reply="I've registered the new product details for the inventory.",
    ),
    KeywordRule(
        key="order_update",
        any_of=("order update",),
        reply="I've updated the order status. The customer will be notified.",
        actions=(ActionTag.NOTIFY_EMAIL, ActionTag.NOTIFY_CHANNEL),
    ),
)

# ──────────────────────────────────────────────────────────────
# Admin
# ──────────────────────────────────────────────────────────────

ADMIN_MENU = (
    "Hello admin. You can ask me about:\n"
    "1. Sales data (daily, weekly, monthly)\n"
    "2. Website traffic and analytics\n"
    "3. Content updates for your website\n"
    "4. Broadcasting promotions or alerts to customers or staff\n"
    "5. Staff management:\n"
    '   - Add staff: "Add staff: [phone]"\n'
    '   - List staff: "List all staff"\n'
    '   - Remove staff: "Remove staff: [phone]"\n'
    '   - Activate/Deactivate staff: "Activate staff: [phone]" or '
    '"Deactivate staff: [phone]"'
)

ADMIN_SALES_TEMPLATE = (
    "Sales summary requested for {period}. The report will be compiled from the "
    "order history and sent to you."
)

# Período do relatório de vendas: primeiro termo encontrado vence
SALES_PERIODS: tuple[tuple[str, str], ...] = (
    ("week", "this week"),
    ("month", "this month"),
    ("year", "this year"),
)
DEFAULT_SALES_PERIOD = "today"

ADMIN_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        key="traffic",
        any_of=("traffic", "analytics"),
        reply=(
            "Traffic and analytics summary requested. The report will be compiled "
            "from your analytics platform and sent to you."
        ),
    ),
    KeywordRule(
        key="content_update",
        any_of=("update",),
        all_of=("content",),
        reply="I've registered your content update request.",
    ),
    KeywordRule(
        key="broadcast",
        any_of=("broadcast", "promotion"),
        reply="I've prepared your broadcast message for the selected audience.",
        actions=(ActionTag.NOTIFY_EMAIL, ActionTag.NOTIFY_CHANNEL),
    ),
)

STAFF_ADD_USAGE = 'Please provide the staff phone number. Format: "Add staff: [phone]"'
STAFF_REMOVE_USAGE = (
    'Please provide the phone number of the staff member to remove. '
    'Format: "Remove staff: [phone]"'
)
STAFF_STATUS_USAGE = (
    "Please provide the phone number of the staff member to {verb}. "
    'Format: "{title} staff: [phone]"'
)
STAFF_LIST_HEADER = "Here are all active staff members:"
STAFF_LIST_ENTRY = "- {phone} (added by {granted_by} on {created})"
STAFF_LIST_EMPTY = "No staff members found."
STAFF_MANAGEMENT_UNAVAILABLE = "Staff management is not enabled for this service."
