# src/semver_flow/core/config/__init__.py

"""
Camada de configuração do SemVer Flow.

Este pacote contém as estruturas e utilitários responsáveis por modelar,
carregar, mesclar, identificar e resolver a configuração do cálculo de versão.

Responsabilidades do pacote:
    - model    → GlobalConfig, BranchConfig e enums
    - branches → tabela imutável dos 7 perfis de branch built-in
    - defaults → motor de resolução (fill-if-absent em ordem fixa)
    - loader   → localização do arquivo + override + resolução
    - merge    → deep-merge determinístico
    - hashing  → hash canônico para a chave de cache

Invariantes:
    - Valores informados pelo usuário nunca são sobrescritos por defaults
    - A mesma entrada sempre produz a mesma configuração final
    - Conflitos estruturais são tratados como erro
"""
