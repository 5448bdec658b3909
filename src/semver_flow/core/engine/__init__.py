# src/semver_flow/core/engine/__init__.py
"""
Engine do SemVer Flow.

Este pacote contém o orquestrador do cálculo de versão, responsável por:
    - resolver o contexto do build server (quando houver)
    - preparar o repositório e derivar a chave de cache
    - reutilizar variáveis em cache ou invocar o version finder
    - reconciliar falhas de cada caminho

Componentes principais:
    - context  → VersionContext entregue ao version finder
    - computer → VersionComputer (entrada estrita + entrada best-effort)

Invariantes:
    - Falhas de gravação de cache nunca alteram o valor devolvido
    - Falhas de leitura de cache equivalem a cache miss
    - Erros de configuração e de localização do repositório propagam
"""
