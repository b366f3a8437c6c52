"""Senders outbound usados pelo Delivery Executor."""

from app.infra.delivery.email_sender import ResendEmailSender
from app.infra.delivery.logging_senders import LoggingChannelSender, LoggingEmailSender
from app.infra.delivery.whatsapp_sender import WhatsAppTextSender

__all__ = [
    "LoggingChannelSender",
    "LoggingEmailSender",
    "ResendEmailSender",
    "WhatsAppTextSender",
]
