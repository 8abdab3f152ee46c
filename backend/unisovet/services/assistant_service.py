"""
Virtual assistant ("Uni") for the UnisoVet clinic.

The assistant keeps a linear transcript, rebuilds its system instruction
from the live clinic collections for every outbound request, and never lets
a remote failure escape: a fixed apology is appended instead.
"""

import json
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from unisovet.core.config import DEFAULT_CLINIC_PHONE
from unisovet.domain.entities import Appointment, Client, Pet
from unisovet.domain.interfaces import ITextCompletionService

logger = logging.getLogger(__name__)

ROLE_USER = "user"
ROLE_MODEL = "model"

GREETING = (
    "Olá! Eu sou a Uni, sua assistente virtual da UnisoVet. "
    "Como posso ajudar hoje?"
)
APOLOGY = (
    "Desculpe, estou com um problema técnico no momento. "
    "Por favor, tente novamente mais tarde."
)

PERSONA_TEMPLATE = """Você é a Uni, uma assistente virtual amigável e prestativa da clínica veterinária UnisoVet. Seu objetivo é fornecer um excelente atendimento ao cliente.
- Seja concisa, educada e profissional.
- Use os dados fornecidos da clínica para responder às perguntas com precisão.
- Se você não souber a resposta ou se uma solicitação for muito complexa (como diagnósticos médicos), peça educadamente ao usuário para entrar em contato com a clínica diretamente pelo telefone {phone}.
- Você não pode realizar ações como atualizar ou excluir registros. Você só pode fornecer informações com base nos dados fornecidos.
- Ao ser questionado sobre agendamentos, consulte as datas e os motivos fornecidos.
- Ao ser questionado sobre animais de estimação, forneça sua espécie, raça e o nome do proprietário.
- Fale em Português do Brasil.

Aqui estão os dados atuais da clínica em formato JSON:"""

ContextSnapshot = Tuple[Iterable[Client], Iterable[Pet], Iterable[Appointment]]


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}

    def to_turn(self) -> dict:
        """Message in the remote API's ``{role, parts: [{text}]}`` format."""
        return {"role": self.role, "parts": [{"text": self.content}]}


def _dump(records) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2)


def build_context(
    clients: Iterable[Client],
    pets: Iterable[Pet],
    appointments: Iterable[Appointment],
    phone: str = DEFAULT_CLINIC_PHONE,
) -> str:
    """Build the system instruction from the current clinic collections."""
    return (
        PERSONA_TEMPLATE.format(phone=phone)
        + "\n\nClientes:\n"
        + _dump(clients)
        + "\n\nPets:\n"
        + _dump(pets)
        + "\n\nAgendamentos:\n"
        + _dump(appointments)
        + "\n"
    )


class VirtualAssistant:
    """Chat panel state plus the single outbound request it may have in flight."""

    def __init__(
        self,
        completion_service: ITextCompletionService,
        context_provider: Callable[[], ContextSnapshot],
        phone: str = DEFAULT_CLINIC_PHONE,
    ):
        self.completion_service = completion_service
        self.context_provider = context_provider
        self.phone = phone
        self.is_open = False
        self._messages: List[ChatMessage] = []
        self._transcript_lock = threading.Lock()
        self._in_flight = threading.Lock()

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        with self._transcript_lock:
            return tuple(self._messages)

    @property
    def is_loading(self) -> bool:
        return self._in_flight.locked()

    @property
    def can_send(self) -> bool:
        return not self.is_loading

    def _append(self, message: ChatMessage) -> None:
        with self._transcript_lock:
            self._messages.append(message)

    def open(self) -> None:
        """Show the panel; greet only when the transcript is still empty."""
        self.is_open = True
        with self._transcript_lock:
            if not self._messages:
                self._messages.append(ChatMessage(ROLE_MODEL, GREETING))

    def close(self) -> None:
        self.is_open = False

    def toggle(self) -> bool:
        if self.is_open:
            self.close()
        else:
            self.open()
        return self.is_open

    def system_instruction(self) -> str:
        clients, pets, appointments = self.context_provider()
        return build_context(clients, pets, appointments, phone=self.phone)

    def send(self, text: str) -> bool:
        """Send a user message and append the reply (or the apology).

        Returns False without issuing a request when ``text`` is blank or a
        previous send has not resolved yet.
        """
        if not text or not text.strip():
            return False
        if not self._in_flight.acquire(blocking=False):
            logger.info("Assistant send rejected, request already in flight")
            return False

        try:
            self._append(ChatMessage(ROLE_USER, text))
            contents = [m.to_turn() for m in self.messages]
            try:
                reply = self.completion_service.generate(
                    contents, self.system_instruction()
                )
            except Exception as e:
                logger.error(
                    "Error calling text-completion service",
                    extra={"context": {"error": str(e), "turns": len(contents)}},
                    exc_info=True,
                )
                reply = APOLOGY
            self._append(ChatMessage(ROLE_MODEL, reply))
        finally:
            self._in_flight.release()
        return True

    def state(self) -> dict:
        return {
            "isOpen": self.is_open,
            "isLoading": self.is_loading,
            "canSend": self.can_send,
            "messages": [m.to_dict() for m in self.messages],
        }
