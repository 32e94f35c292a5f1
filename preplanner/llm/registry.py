from typing import Any, Callable

STRATEGIES: dict[str, Callable[..., Any]] = {}

def register(name: str):
    def deco(cls: Callable[..., Any]):
        STRATEGIES[name] = cls
        return cls
    return deco

def get_strategy(name: str):
    key = (name or "").lower().strip()
    if key not in STRATEGIES:
        raise KeyError(f"Unknown LLM_PROVIDER: {name}. Known: {list(STRATEGIES.keys())}")
    return STRATEGIES[key]
