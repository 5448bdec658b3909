# src/semver_flow/core/config/loader.py
"""
Loader canônico de configuração do SemVer Flow.

Este módulo localiza, carrega e resolve a configuração efetiva utilizada
no cálculo de versão.

A configuração é resolvida a partir de:
    - um arquivo do repositório (opcional, `GitVersion.yml` por padrão)
    - um mapa de override programático (opcional)

Política de resolução:
    - O arquivo é procurado primeiro no diretório de trabalho e depois na
      raiz do projeto
    - O override sempre tem prioridade sobre o arquivo (deep-merge)
    - O resultado do merge é convertido em `GlobalConfig` e resolvido
      pelo motor de defaults

Invariantes:
    - Arquivo ausente equivale a configuração vazia
    - Overrides nunca mutam o conteúdo lido do arquivo
    - A mesma entrada sempre produz a mesma configuração final
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .defaults import resolve
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge
from .model import GlobalConfig

DEFAULT_CONFIG_FILE_NAME = "GitVersion.yml"

PathLike = Union[str, Path]


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


class ConfigFileLocator:
    """Localiza o arquivo de configuração do repositório."""

    def __init__(self, file_name: str = DEFAULT_CONFIG_FILE_NAME):
        self.file_name = file_name

    def get_config_file_path(self, directory: PathLike) -> Path:
        return Path(directory) / self.file_name

    def locate(
        self,
        working_directory: Optional[PathLike],
        project_root: Optional[PathLike],
    ) -> Optional[Path]:
        for directory in (working_directory, project_root):
            if not directory:
                continue
            candidate = self.get_config_file_path(directory)
            if candidate.is_file():
                return candidate
        return None

    def read_config(self, path: PathLike) -> Dict[str, Any]:
        return _load_file(Path(path))


def provide_configuration(
    *,
    project_root: PathLike,
    working_directory: Optional[PathLike] = None,
    override_config: Optional[Dict[str, Any]] = None,
    locator: Optional[ConfigFileLocator] = None,
) -> GlobalConfig:
    """
    Carrega e resolve a configuração efetiva do cálculo de versão.

    Args:
        project_root: Raiz do projeto (diretório que contém `.git`).
        working_directory: Diretório de trabalho do chamador (procurado primeiro).
        override_config: Mapa com overrides explícitos (chaves YAML).
        locator: Localizador do arquivo de configuração.

    Returns:
        GlobalConfig: Configuração totalmente populada.

    Raises:
        ConfigError: Para qualquer falha de carregamento, merge ou resolução.
    """
    locator = locator or ConfigFileLocator()

    config_path = locator.locate(working_directory, project_root)
    file_config = locator.read_config(config_path) if config_path is not None else {}

    effective = file_config
    if override_config:
        effective = deep_merge(file_config, override_config)

    config = GlobalConfig.from_dict(effective)
    resolve(config)
    return config
