"""Testes do Delivery Executor."""

from __future__ import annotations

import pytest

from app.domain.response import ActionTag, AgentResponse
from app.services.delivery_executor import NOTIFICATION_SUBJECT, DeliveryExecutor
from tests.fakes.fake_senders import RecordingChannelSender, RecordingEmailSender

SENDER = "+15551234567"


@pytest.mark.asyncio
async def test_no_actions_sends_nothing(
    channel_sender: RecordingChannelSender, email_sender: RecordingEmailSender
) -> None:
    executor = DeliveryExecutor(channel_sender=channel_sender, email_sender=email_sender)

    report = await executor.execute(AgentResponse(reply="hi"), SENDER)

    assert report.delivered == []
    assert channel_sender.sent == []
    assert email_sender.sent == []


@pytest.mark.asyncio
async def test_actions_are_executed_in_order(
    channel_sender: RecordingChannelSender, email_sender: RecordingEmailSender
) -> None:
    executor = DeliveryExecutor(channel_sender=channel_sender, email_sender=email_sender)
    response = AgentResponse.of("Order updated", ActionTag.NOTIFY_EMAIL, ActionTag.NOTIFY_CHANNEL)

    report = await executor.execute(response, SENDER)

    assert report.delivered == ["email", "whatsapp"]
    assert channel_sender.sent == [(SENDER, "Order updated")]
    assert email_sender.sent == [(SENDER, NOTIFICATION_SUBJECT, "Order updated")]


@pytest.mark.asyncio
async def test_failing_action_does_not_block_the_next(
    email_sender: RecordingEmailSender, caplog: pytest.LogCaptureFixture
) -> None:
    failing_channel = RecordingChannelSender(fail=True)
    executor = DeliveryExecutor(channel_sender=failing_channel, email_sender=email_sender)
    response = AgentResponse.of("Broadcast", ActionTag.NOTIFY_CHANNEL, ActionTag.NOTIFY_EMAIL)

    with caplog.at_level("ERROR"):
        report = await executor.execute(response, SENDER)

    assert report.failed == ["whatsapp"]
    assert report.delivered == ["email"]
    assert len(email_sender.sent) == 1
    assert "delivery_action_failed" in caplog.text


@pytest.mark.asyncio
async def test_custom_subject(
    channel_sender: RecordingChannelSender, email_sender: RecordingEmailSender
) -> None:
    executor = DeliveryExecutor(
        channel_sender=channel_sender,
        email_sender=email_sender,
        notification_subject="Issue reported",
    )

    await executor.execute(AgentResponse.of("details", ActionTag.NOTIFY_EMAIL), SENDER)

    assert email_sender.sent[0][1] == "Issue reported"


@pytest.mark.asyncio
async def test_unknown_tag_is_ignored(
    channel_sender: RecordingChannelSender,
    email_sender: RecordingEmailSender,
    caplog: pytest.LogCaptureFixture,
) -> None:
    executor = DeliveryExecutor(channel_sender=channel_sender, email_sender=email_sender)
    response = AgentResponse.of("Restock", "notify-via-sms", ActionTag.NOTIFY_CHANNEL)

    with caplog.at_level("WARNING"):
        report = await executor.execute(response, SENDER)

    assert report.ignored == ["notify-via-sms"]
    assert report.delivered == ["whatsapp"]
    assert channel_sender.sent == [(SENDER, "Restock")]
    assert "delivery_action_ignored" in caplog.text
