# src/semver_flow/core/cache/__init__.py
"""
Cache do cálculo de versão.

Componentes:
    - key   → fingerprint do estado do repositório + configuração (CacheKey)
    - store → cache em disco (YAML) das variáveis de saída

Limites explícitos:
    - Não há exclusão mútua entre escritores concorrentes da mesma chave:
      a última gravação prevalece
"""
