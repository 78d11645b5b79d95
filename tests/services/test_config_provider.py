from dbexport.services.config_provider import EnvironmentConfigProvider, InMemoryConfigProvider


def test_environment_provider_reads_given_environment():
    provider = EnvironmentConfigProvider({"MONGODB_HOST": "db.internal"})

    assert provider.get("MONGODB_HOST") == "db.internal"
    assert provider.get("MONGODB_PORT") is None


def test_environment_provider_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("MONGODB_USERNAME", "backup")

    assert EnvironmentConfigProvider().get("MONGODB_USERNAME") == "backup"


def test_empty_values_are_treated_as_absent():
    provider = InMemoryConfigProvider({"MONGODB_PORT": ""})

    assert provider.get("MONGODB_PORT") is None
    assert provider.get("MONGODB_PORT", "27018") == "27018"
