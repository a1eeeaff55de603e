class EventLog:
    """Collects every event the engine emits, in order."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of(self, cls):
        return [e for e in self.events if isinstance(e, cls)]

    def clear(self):
        self.events.clear()


class ScriptedRandom:
    """Random source replaying fixed values, then repeating the last one."""

    def __init__(self, *values: float):
        self.values = list(values)
        self.i = 0

    def random(self) -> float:
        v = self.values[min(self.i, len(self.values) - 1)]
        self.i += 1
        return v
