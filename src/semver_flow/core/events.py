# src/semver_flow/core/events.py
"""
Event Log estruturado do SemVer Flow.

Este módulo define o `EventLog`, o registro canônico de eventos de uma
execução do orquestrador (e dos colaboradores que recebem o log).

Invariantes:
    - Todo evento inclui `run_id`, `stage`, `level`, `message` e `timestamp` (UTC)
    - Warnings são agrupados por `stage`
    - O log é apenas acumulado em memória; persistência é do chamador
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class EventLog:
    """Log de eventos estruturado, compartilhado entre orquestrador e colaboradores."""

    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)

    def warn(self, *, stage: str, message: str, **extra: Any) -> None:
        """Registra um evento `warning` e o agrupa em `warnings[stage]`."""
        self.log(stage=stage, level="warning", message=message, **extra)
        self.add_warning(stage=stage, message=message)

    def by_level(self, level: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("level") == level]
