import logging
import random

logger = logging.getLogger("nemo")

CHAT_FALLBACKS = (
    "Olá! 😊 Estou passando por uma manutenção rápida. Enquanto isso, posso te dizer que o Nemo System é incrível!",
    "Ops! Estou com alguns probleminhas técnicos no momento. Tente novamente em alguns instantes!",
    "Desculpe a interrupção! Estou ajustando alguns circuitos. Que tal conversarmos sobre tecnologia em geral?",
    "Parece que meus neurônios digitais estão um pouco dispersos hoje! Vamos tentar novamente?",
)

FRIENDLY_FALLBACKS = (
    'Olá! 😊 Que bom conversar com você! "{excerpt}..." é um assunto interessante! O que mais gostaria de saber?',
    "Oi! 👋 Em que posso te ajudar hoje? Posso conversar sobre tecnologia, o Nemo System, ou apenas bater um papo amigável!",
    "Hey! Tudo bem? Eu sou a Nemo AI, sua companheira virtual aqui no sistema. Pronto para uma conversa divertida? 🚀",
    "Olá, amigo! 😄 Como vai? Eu adoro ajudar as pessoas aqui no Nemo System. Me pergunte qualquer coisa!",
    "Oi! Que bom te ver! 😊 Vamos conversar? Posso falar sobre o sistema, tecnologia, ou qualquer outro assunto interessante!",
)

EXCERPT_CHARS = 30

QUICK_RESPONSES = {
    "tecnologia": "💻 **Tecnologia é incrível!** Desde IA até desenvolvimento web, há sempre algo novo para aprender. Você trabalha com tech ou é só curioso?",
    "programacao": "👨‍💻 **Adoro programação!** É como mágica com código. HTML, CSS, JavaScript, Python... cada linguagem tem sua beleza!",
    "piada": "🤣 **Por que o programador ficou pobre?** Porque ele usava todo seu cache! 😂",
    "ajuda": "🆘 **Precisa de ajuda?** Posso explicar funcionalidades do Nemo System, conversar sobre tech ou apenas bater um papo amigável!",
    "nemo": "🚀 **Nemo System** é uma plataforma incrível! Tem ferramentas úteis, interface moderna e foco em segurança. Posso te ajudar a explorá-la!",
    "ola": "👋 **Olá! Tudo bem?** Que bom te ver aqui! Eu sou a Nemo AI, sua companheira virtual. Como posso ajudar hoje? 😊",
}

QUICK_DEFAULT = "🤔 Não conheço essa ação, mas adoraria conversar! Me pergunte qualquer coisa!"


class FallbackGenerator:
    """Picks canned replies when no real completion is available.

    The random source is injectable so tests can seed it.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def chat_fallback(self) -> str:
        return self._rng.choice(CHAT_FALLBACKS)

    def friendly(self, original_message: str | None = None) -> str:
        template = self._rng.choice(FRIENDLY_FALLBACKS)
        excerpt = (original_message or "")[:EXCERPT_CHARS]
        return template.format(excerpt=excerpt)


def quick_reply(action: str | None) -> str:
    reply = QUICK_RESPONSES.get(action or "")
    if reply is None:
        logger.debug("Unknown quick action: %r", action)
        return QUICK_DEFAULT
    return reply
