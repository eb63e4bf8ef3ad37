from typing import Dict, Optional

from runtime.objects import Object


class Environment:
    """A scope's bindings plus a link to the scope that encloses it.

    Closures hold a plain reference to the environment they were defined in, so
    several functions may share one environment and it lives as long as any of
    them does. Bindings are only ever added to the innermost environment.
    """

    def __init__(self, outer: Optional["Environment"] = None):
        self._store: Dict[str, Object] = {}
        self.outer = outer

    def enclose(self) -> "Environment":
        return Environment(outer=self)

    def lookup(self, name: str) -> Optional[Object]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env._store:
                return env._store[name]
            env = env.outer
        return None

    def declare(self, name: str, val: Object) -> Object:
        self._store[name] = val
        return val

    def __repr__(self):
        names = ", ".join(self._store)
        return f"<Environment [{names}] outer={self.outer!r}>"
