"""
Tests for the offline payment gateway used in development.
"""

from __future__ import annotations

from app.infrastructure.payments.mock_gateway import MockPaymentGateway


def test_intent_ids_do_not_repeat_across_gateway_instances():
    """A restarted process must not reissue an id already keyed in the outbox."""
    before_restart = MockPaymentGateway().create_intent(10000)
    after_restart = MockPaymentGateway().create_intent(10000)

    assert before_restart.id != after_restart.id
    assert before_restart.id.startswith("pi_mock_")


def test_confirm_returns_intent_id_as_payment_ref():
    gateway = MockPaymentGateway()
    intent = gateway.create_intent(4000)

    confirmation = gateway.confirm_payment(intent.client_secret, "http://testserver/book")

    assert confirmation.succeeded is True
    assert confirmation.payment_ref == intent.id
    assert intent.amount == 4000


def test_confirm_unknown_secret_fails():
    confirmation = MockPaymentGateway().confirm_payment("pi_mock_x_secret_y", "http://testserver/book")

    assert confirmation.succeeded is False
    assert confirmation.message == "Unknown payment."
