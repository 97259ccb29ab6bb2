"""
Unit tests for composite import IDs.
"""

import pytest

from remote_reconciler.client.exceptions import RemoteAPIError
from remote_reconciler.exceptions import RemoteError, ValidationError
from remote_reconciler.models.enums import ErrorKind, LifecycleState
from remote_reconciler.models.remote import ResourceEndpoint
from remote_reconciler.reconciler.importer import Importer
from remote_reconciler.resources.addon import ADDONS_ENDPOINT, AddonReconciler
from remote_reconciler.resources.service_integration import ServiceIntegrationReconciler

EXPECTED_MESSAGE = (
    "Error importing service_integration. "
    "Expecting an import ID formed as '<service_id>.<integration_id>'"
)


@pytest.fixture
def integrations(mock_remote_client, test_settings, controller) -> ServiceIntegrationReconciler:
    return ServiceIntegrationReconciler(mock_remote_client, settings=test_settings, controller=controller)


def test_parse_two_part_id(integrations):
    assert integrations.importer().parse("PSVC001.PQ12345") == ("PSVC001", "PQ12345")


@pytest.mark.parametrize(
    "raw_id",
    ["PSVC001", "PSVC001.PQ12345.extra", ".PQ12345", "PSVC001.", "", "."],
)
def test_malformed_ids_rejected(integrations, raw_id):
    with pytest.raises(ValidationError) as exc_info:
        integrations.importer().parse(raw_id)

    assert exc_info.value.message == EXPECTED_MESSAGE
    assert exc_info.value.field == "id"


@pytest.mark.asyncio
async def test_import_id_checks_existence(integrations, mock_remote_client, remote_resource):
    mock_remote_client.get.return_value = remote_resource("PQ12345")

    ids = await integrations.importer().import_id("PSVC001.PQ12345")

    assert ids == ("PSVC001", "PQ12345")
    endpoint, resource_id = mock_remote_client.get.await_args.args
    assert endpoint.path == "services/PSVC001/integrations"
    assert resource_id == "PQ12345"


@pytest.mark.asyncio
async def test_malformed_id_makes_no_network_call(integrations, mock_remote_client):
    with pytest.raises(ValidationError):
        await integrations.importer().import_id("PQ12345")

    mock_remote_client.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_existence_check_failure_propagates_unretried(
    integrations, mock_remote_client, api_error, fake_clock
):
    error = api_error(404)
    mock_remote_client.get.side_effect = error

    with pytest.raises(RemoteAPIError) as exc_info:
        await integrations.importer().import_id("PSVC001.PQMISSING")

    assert exc_info.value is error
    assert mock_remote_client.get.await_count == 1
    assert fake_clock.sleeps == []


def test_single_component_id_passed_through_unsplit(mock_remote_client):
    importer = Importer(
        client=mock_remote_client,
        locate=lambda ids: (ADDONS_ENDPOINT, ids[0]),
        arity=1,
        id_format="<id>",
        resource_type="addon",
    )

    assert importer.parse("PADD.001") == ("PADD.001",)


def test_custom_delimiter(mock_remote_client):
    endpoint = ResourceEndpoint(path="teams/T1/members", envelope="member", collection_key="members")
    importer = Importer(
        client=mock_remote_client,
        locate=lambda ids: (endpoint, ids[1]),
        arity=2,
        id_format="<team_id>:<user_id>",
        resource_type="team_membership",
        delimiter=":",
    )

    assert importer.parse("T1:U1") == ("T1", "U1")
    with pytest.raises(ValidationError):
        importer.parse("T1.U1")


def test_arity_must_be_positive(mock_remote_client):
    with pytest.raises(ValueError):
        Importer(
            client=mock_remote_client,
            locate=lambda ids: (ADDONS_ENDPOINT, ids[0]),
            arity=0,
            id_format="",
            resource_type="addon",
        )


@pytest.mark.asyncio
async def test_import_state_reads_into_new_state(
    integrations, mock_remote_client, remote_resource, sample_integration_data
):
    payload = dict(sample_integration_data)
    payload.pop("id")
    mock_remote_client.get.return_value = remote_resource("PQ12345", **payload)

    state = await integrations.import_state("PSVC001.PQ12345")

    assert state.identity == "PQ12345"
    assert state.service == "PSVC001"
    assert state.name == "Email Alerts"
    assert state.integration_email == sample_integration_data["integration_email"]
    assert state.lifecycle == LifecycleState.PRESENT
    # existence check plus the read
    assert mock_remote_client.get.await_count == 2


@pytest.mark.asyncio
async def test_addon_import_uses_plain_id(mock_remote_client, test_settings, controller, remote_resource):
    reconciler = AddonReconciler(mock_remote_client, settings=test_settings, controller=controller)
    mock_remote_client.get.return_value = remote_resource("PADD001", name="Runbooks", src="https://docs")

    state = await reconciler.import_state("PADD001")

    assert state.identity == "PADD001"
    assert state.src == "https://docs"
    mock_remote_client.get.assert_awaited_with(ADDONS_ENDPOINT, "PADD001")


@pytest.mark.asyncio
async def test_import_of_resource_deleted_before_read_fails(
    integrations, mock_remote_client, remote_resource, api_error
):
    # exists at the existence check, gone by the read
    mock_remote_client.get.side_effect = [remote_resource("PQ12345"), api_error(404)]

    with pytest.raises(RemoteError) as exc_info:
        await integrations.import_state("PSVC001.PQ12345")

    assert exc_info.value.kind == ErrorKind.NOT_FOUND
    assert "PSVC001.PQ12345" in exc_info.value.message
    assert mock_remote_client.get.await_count == 2
