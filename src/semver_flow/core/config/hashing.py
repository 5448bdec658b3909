# src/semver_flow/core/config/hashing.py
"""
Hashing canônico de configuração do SemVer Flow.

O hash gerado representa a identidade estrutural de um mapa de configuração
e participa da chave de cache do cálculo de versão.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - Algoritmo SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict, Optional


def compute_config_hash(config: Optional[Dict[str, Any]]) -> str:
    """
    Gera um hash determinístico de um mapa de configuração.

    `None` é tratado como configuração vazia (`{}`).

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
