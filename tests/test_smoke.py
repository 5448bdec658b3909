# tests/test_smoke.py
"""
Teste de sanidade estrutural (smoke test) do SemVer Flow.

Garante apenas que o pacote é importável e expõe o namespace público.
Não valida comportamento de domínio.
"""


def test_smoke():
    import semver_flow

    assert hasattr(semver_flow, "VersionComputer")
    assert hasattr(semver_flow, "resolve")
