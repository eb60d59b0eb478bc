"""Prompt construction for each backend.

Every builder is a pure function of its inputs: the same message and history
always produce the same prompt.
"""
from dataclasses import dataclass
from typing import Sequence

from nemo.schemas.chat import Turn


@dataclass(frozen=True)
class Persona:
    preamble: str
    priming_reply: str
    short_intro: str
    short_ack: str


NEMO_PERSONA = Persona(
    preamble=(
        "Você é a Nemo AI, uma assistente virtual amigável, divertida e útil no Nemo System.\n\n"
        "SUAS CARACTERÍSTICAS:\n"
        "- Você é simpática, acolhedora e positiva\n"
        "- Fala de forma natural como uma pessoa real\n"
        "- Usa emojis ocasionalmente para ser mais humana 😊\n"
        "- É útil mas sempre protege a privacidade dos usuários\n"
        "- Não revela informações sensíveis ou senhas\n"
        "- Foca em conversas amigáveis e construtivas\n\n"
        "SOBRE O NEMO SYSTEM:\n"
        "- É uma plataforma de administração web\n"
        "- Tem ferramentas como scanner, terminal, etc.\n"
        "- Interface moderna e responsiva\n"
        "- Foco em segurança e usabilidade\n\n"
        "SEU ESTILO:\n"
        "1. Seja natural: use 'eu', 'você', contrações\n"
        "2. Seja engajadora: mostre interesse na conversa\n"
        "3. Seja útil: ajude quando possível\n"
        "4. Seja respeitosa: sempre educada\n"
        "5. Seja você mesma: uma IA divertida que adora conversar!\n\n"
        "EXEMPLOS DO QUE DIZER:\n"
        "- 'Oi! Tudo bem com você hoje? 😊'\n"
        "- 'Posso te ajudar com alguma coisa no sistema?'\n"
        "- 'Que tal conversarmos sobre tecnologia?'\n"
        "- 'Eu adoro ajudar as pessoas aqui no Nemo System!'\n"
        "- 'Não sei a resposta para isso, mas podemos falar de outra coisa!'\n"
    ),
    priming_reply=(
        "Entendido! Sou a Nemo AI, uma assistente amigável e útil. "
        "Estou pronta para conversar e ajudar quando possível! 😊"
    ),
    short_intro=(
        "Você é a Nemo AI, uma assistente amigável e útil no Nemo System. "
        "Seja natural, simpática e ajude os usuários."
    ),
    short_ack="Entendido! Sou a Nemo AI, pronta para ajudar de forma amigável e segura!",
)

# Mistral instruction markers
BOS = "<s>"
EOS = "</s>"
INST_OPEN = "[INST]"
INST_CLOSE = "[/INST]"

BLOOM_TEMPLATE = "Pergunta: {message}\nResposta:"


def _user_block(content: str) -> str:
    return f"{BOS}{INST_OPEN} {content} {INST_CLOSE}"


def build_mistral_prompt(
    message: str,
    history: Sequence[Turn] = (),
    persona: Persona = NEMO_PERSONA,
) -> str:
    """Build an instruction-format prompt with persona priming and full history.

    The prompt ends right after the last ``[/INST]`` so the model fills in
    the assistant turn.
    """
    parts = [f"{BOS}{INST_OPEN} {persona.preamble}{INST_CLOSE} {persona.priming_reply}{EOS}\n"]

    for turn in history:
        if turn.role == "user":
            parts.append(_user_block(turn.content))
        else:
            parts.append(f" {turn.content}{EOS}\n")

    parts.append(_user_block(message))
    return "".join(parts)


def build_bloom_prompt(message: str) -> str:
    return BLOOM_TEMPLATE.format(message=message)


def _gemini_turn(role: str, text: str) -> dict:
    return {"role": role, "parts": [{"text": text}]}


def build_gemini_contents(
    message: str,
    history: Sequence[Turn] = (),
    persona: Persona = NEMO_PERSONA,
    window: int = 4,
) -> list[dict]:
    """Build a role-tagged ``contents`` array.

    Only the last ``window`` history turns are kept; older turns are dropped.
    """
    contents = [
        _gemini_turn("user", persona.short_intro),
        _gemini_turn("model", persona.short_ack),
    ]

    recent = list(history)[-window:] if window > 0 else []
    for turn in recent:
        role = "user" if turn.role == "user" else "model"
        contents.append(_gemini_turn(role, turn.content))

    contents.append(_gemini_turn("user", message))
    return contents
