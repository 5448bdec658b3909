# src/semver_flow/core/__init__.py
"""
Core do SemVer Flow.

Este pacote contém a implementação canônica do cálculo de versão,
independente de build servers específicos ou ferramentas de saída.

Componentes principais:
    - config   → modelo de configuração, tabela de branches e motor de resolução
    - engine   → orquestração do cálculo com política de cache
    - cache    → fingerprint do estado do repositório e cache em disco
    - ports    → contratos dos colaboradores externos

Princípios fundamentais:
    - Resolução de configuração determinística (fill-if-absent)
    - Falhas de cache nunca alteram o resultado devolvido ao chamador
    - Colaboradores externos são acessados apenas por interfaces estreitas

Limites explícitos:
    - Não percorre histórico de commits para calcular versões
    - Não formata variáveis para build servers
"""
