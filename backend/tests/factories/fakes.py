"""
In-memory fakes for the storage and text-completion interfaces.
"""

import json
import threading

from unisovet.domain.interfaces import IKeyValueStore, ITextCompletionService


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed key/value store that records every save."""

    def __init__(self, initial=None):
        self.slots = {k: json.dumps(v) for k, v in (initial or {}).items()}
        self.saves = []

    def load(self, key, default):
        if key not in self.slots:
            return default
        return json.loads(self.slots[key])

    def save(self, key, value):
        self.saves.append((key, value))
        self.slots[key] = json.dumps(value)


class FakeCompletionService(ITextCompletionService):
    """Text-completion double: returns ``reply`` or raises ``error``.

    When ``gate`` is set, ``generate`` signals ``started`` and then blocks
    until the gate opens, so tests can observe an in-flight request.
    """

    def __init__(self, reply="Olá! Posso ajudar com isso."):
        self.reply = reply
        self.error = None
        self.calls = []
        self.gate = None
        self.started = threading.Event()

    def generate(self, contents, system_instruction):
        self.calls.append((contents, system_instruction))
        self.started.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.reply
