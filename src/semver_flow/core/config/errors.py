# src/semver_flow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do SemVer Flow.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, merge e resolução de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de configuração são falhas fatais, nunca re-tentadas
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de repositório ou de cache
"""

from typing import Optional

CONFIGURATION_DOCS = "docs/configuration.md"


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do SemVer Flow.

    Todas as exceções levantadas durante carregamento, merge e resolução
    de configuração devem herdar desta classe.
    """


class ConfigurationError(ConfigError):
    """
    Exceção levantada quando uma entrada de branch não possui um campo
    obrigatório após o preenchimento de defaults.

    A mensagem sempre nomeia a chave do branch ofensor e aponta para a
    documentação de configuração.

    Atributos:
        branch_key: chave do branch no mapa `branches`
        field: campo ausente (YAML), ex.: `regex`, `source-branches`
        hint: onde corrigir
    """

    def __init__(self, branch_key: str, field: str, detail: Optional[str] = None):
        self.branch_key = branch_key
        self.field = field
        self.hint = f"Veja {CONFIGURATION_DOCS} para mais informações"
        message = detail or (
            f"Configuração do branch '{branch_key}' não possui o campo obrigatório '{field}'"
        )
        super().__init__(f"{message}\n{self.hint}")


class InvalidConfigValueError(ConfigError):
    """
    Exceção levantada quando uma chave desconhecida ou um valor inválido
    (ex.: enum fora do domínio) aparece na configuração.

    Limites explícitos:
        - Não tenta coerção ou correção automática de valores
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"branches": {"develop": {...}}}
        - override: {"branches": "develop"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class ConfigFileNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de configuração explicitamente
    solicitado não existe no caminho informado.
    """
