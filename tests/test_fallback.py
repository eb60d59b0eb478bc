from __future__ import annotations

import random

from conftest import FirstChoice
from nemo.services.fallback import (
    CHAT_FALLBACKS,
    FRIENDLY_FALLBACKS,
    QUICK_DEFAULT,
    QUICK_RESPONSES,
    FallbackGenerator,
    quick_reply,
)


def test_chat_fallback_comes_from_pool():
    gen = FallbackGenerator(random.Random(1))
    for _ in range(20):
        assert gen.chat_fallback() in CHAT_FALLBACKS


def test_seeded_generators_agree():
    a = FallbackGenerator(random.Random(42))
    b = FallbackGenerator(random.Random(42))
    assert [a.friendly("oi") for _ in range(10)] == [b.friendly("oi") for _ in range(10)]


def test_friendly_embeds_truncated_excerpt():
    gen = FallbackGenerator(FirstChoice())
    message = "Quero saber tudo sobre redes neurais e aprendizado profundo"

    reply = gen.friendly(message)

    assert f'"{message[:30]}..."' in reply
    assert message[:31] not in reply


def test_friendly_without_message():
    gen = FallbackGenerator(FirstChoice())
    reply = gen.friendly()
    assert reply.startswith("Olá!")
    assert len(reply) > 5


def test_friendly_message_with_braces():
    gen = FallbackGenerator(FirstChoice())
    assert "{x}" in gen.friendly("{x} literal")


def test_every_friendly_variant_is_reachable():
    gen = FallbackGenerator(random.Random(7))
    seen = {gen.friendly("tema") for _ in range(200)}
    assert len(seen) == len(FRIENDLY_FALLBACKS)


def test_quick_reply_known_action():
    assert quick_reply("ola") == QUICK_RESPONSES["ola"]
    assert quick_reply("ola").startswith("👋 **Olá! Tudo bem?**")


def test_quick_reply_unknown_action():
    assert quick_reply("xyz123") == QUICK_DEFAULT
    assert quick_reply("") == QUICK_DEFAULT
    assert quick_reply(None) == QUICK_DEFAULT
