import pytest

from assistant_core.domain.exceptions import ApiError, NetworkError, ProvisioningError, TrainingParseError
from assistant_core.domain.models import Credentials, Workspace
from assistant_core.providers.assistant_client import AssistantClient
from assistant_core.workspace.provisioner import WORKSPACE_SOURCES, resolve_workspace_id
from assistant_core.workspace.training import TrainingDefinition, load_training_definition


class SettingsStub:
    workspace_id = None
    training_file = None


class FakeClient:
    def __init__(self, workspaces=None, list_error=None, create_error=None):
        self.workspaces = workspaces or []
        self.list_error = list_error
        self.create_error = create_error
        self.list_calls = 0
        self.created = []

    def list_workspaces(self):
        self.list_calls += 1
        if self.list_error:
            raise self.list_error
        return [Workspace(workspace_id=w) for w in self.workspaces]

    def create_workspace(self, definition):
        self.created.append(definition)
        if self.create_error:
            raise self.create_error
        return Workspace(workspace_id="created-1")


def test_decision_order_is_explicit():
    assert [name for name, _ in WORKSPACE_SOURCES] == ["configured", "first_existing", "created"]


def test_configured_id_short_circuits_remote_calls():
    cfg = SettingsStub()
    cfg.workspace_id = "from-config"
    client = FakeClient(workspaces=["remote"])
    assert resolve_workspace_id(client, cfg) == "from-config"
    assert client.list_calls == 0
    assert client.created == []


@pytest.mark.parametrize("ids", [["only"], ["first", "second"], ["a", "b", "c", "d", "e"]])
def test_first_listed_workspace_wins(ids):
    client = FakeClient(workspaces=ids)
    assert resolve_workspace_id(client, SettingsStub()) == ids[0]
    assert client.created == []


def test_empty_listing_creates_once_from_bundled_definition():
    client = FakeClient()
    assert resolve_workspace_id(client, SettingsStub()) == "created-1"
    assert len(client.created) == 1
    sent = client.created[0]
    bundled = load_training_definition()
    assert sent.intents == bundled.intents
    assert sent.entities == bundled.entities
    assert sent.dialog_nodes == bundled.dialog_nodes
    assert sent.counterexamples == bundled.counterexamples


def test_custom_loader_is_used():
    client = FakeClient()
    resolve_workspace_id(client, SettingsStub(), loader=lambda: TrainingDefinition(name="custom"))
    assert client.created[0].name == "custom"


def test_listing_failure_becomes_provisioning_error():
    client = FakeClient(list_error=ApiError(code="API_ERROR", message="denied", http_status=403, body={"error": "denied"}))
    with pytest.raises(ProvisioningError) as ei:
        resolve_workspace_id(client, SettingsStub())
    assert ei.value.code == "WORKSPACE_LIST_FAILED"
    assert ei.value.http_status == 403
    assert ei.value.extra["body"] == {"error": "denied"}
    assert client.created == []


def test_creation_failure_becomes_provisioning_error():
    client = FakeClient(create_error=NetworkError(code="NETWORK_ERROR", message="down", http_status=502))
    with pytest.raises(ProvisioningError) as ei:
        resolve_workspace_id(client, SettingsStub())
    assert ei.value.code == "WORKSPACE_CREATE_FAILED"


def test_parse_failure_stops_creation():
    def broken_loader():
        raise TrainingParseError(code="TRAINING_PARSE_ERROR", message="bad", http_status=500)

    client = FakeClient()
    with pytest.raises(TrainingParseError):
        resolve_workspace_id(client, SettingsStub(), loader=broken_loader)
    assert client.created == []


def test_training_file_setting_is_honoured(tmp_path):
    path = tmp_path / "ws.json"
    path.write_text('{"name": "from-file"}', encoding="utf-8")
    cfg = SettingsStub()
    cfg.training_file = str(path)
    client = FakeClient()
    resolve_workspace_id(client, cfg)
    assert client.created[0].name == "from-file"


def test_non_json_listing_becomes_provisioning_error(monkeypatch):
    class Resp:
        status_code = 200
        text = "<html>gateway</html>"

        def json(self):
            raise ValueError("Expecting value")

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def request(self, *a, **kw):
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)
    creds = Credentials(mode="basic", endpoint_url="https://gateway.example.com/api", username="u", password="p")
    client = AssistantClient(creds, version="2018-07-10")
    with pytest.raises(ProvisioningError) as ei:
        resolve_workspace_id(client, SettingsStub())
    assert ei.value.code == "WORKSPACE_LIST_FAILED"
    assert ei.value.http_status == 502
    assert ei.value.extra["body"] == "<html>gateway</html>"
