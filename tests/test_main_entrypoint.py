import aic.core as core_module
import aic.main as main_module


def test_main_delegates_to_cli(monkeypatch):
    called = {}

    def fake_main():
        called["hit"] = True
        return 0

    monkeypatch.setattr(main_module, "cli_main", fake_main)
    assert main_module.main() == 0
    assert called["hit"]


def test_package_exports_lazily():
    import aic

    assert aic.AicWorkflow is core_module.AicWorkflow
    assert aic.__version__
