import logging

from bodbridge.errors import APIRequestError, UnsupportedDrinkError, UnsupportedRequestFormatError
from bodbridge.services.bridge import BridgeOrchestrator, BridgeState, RequestContext
from tests.fakes import FakeKaiClient, FakeZoneCache


def _orchestrator(calls) -> tuple[BridgeOrchestrator, FakeKaiClient]:
    client = FakeKaiClient(calls=calls)
    return BridgeOrchestrator(client, FakeZoneCache({"JJ0103": 7})), client


def test_order_creates_call(coffee_order, scenario_calls):
    orchestrator, client = _orchestrator(scenario_calls)

    outcome = orchestrator.handle(coffee_order, RequestContext(client_ip="10.2.3.4"))

    assert outcome.ok
    assert outcome.state is BridgeState.DONE
    assert outcome.response_text == "OK"
    assert outcome.call.id == 481
    assert client.created == [{"idCallConfig": 481, "idZone": 7, "description": "Beverage request: Coffee"}]


def test_call_list_fetched_per_order(coffee_order, scenario_calls):
    orchestrator, client = _orchestrator(scenario_calls)

    orchestrator.handle(coffee_order)
    orchestrator.handle(coffee_order)

    assert client.call_list_requests == 2


def test_no_matching_call_fails_without_raising(coffee_order, caplog):
    orchestrator, client = _orchestrator([])

    with caplog.at_level(logging.ERROR):
        outcome = orchestrator.handle(coffee_order, RequestContext(url="http://bridge/bod", client_ip="10.0.0.9"))

    assert outcome.state is BridgeState.FAILED
    assert outcome.failed_stage is BridgeState.MATCHING
    assert outcome.response_text == "Error handling request: UnsupportedDrinkError"
    assert isinstance(outcome.error, UnsupportedDrinkError)
    assert outcome.request.zone == 7
    assert client.created == []
    assert "Requestor IP: 10.0.0.9" in caplog.text
    assert "POST http://bridge/bod" in caplog.text
    assert '"Coffee"' in caplog.text


def test_malformed_body_fails_in_parsing(caplog):
    orchestrator, _ = _orchestrator([])

    with caplog.at_level(logging.ERROR):
        outcome = orchestrator.handle(b"{{{", RequestContext(content_length=3, media_type="application/json"))

    assert outcome.failed_stage is BridgeState.PARSING
    assert isinstance(outcome.error, UnsupportedRequestFormatError)
    assert outcome.response_text == "Error handling request: UnsupportedRequestFormatError"
    assert "Body: 3 bytes, media type application/json" in caplog.text


def test_api_failure_fails_in_dispatching(coffee_order, scenario_calls):
    class RejectingClient(FakeKaiClient):
        def create_call(self, payload):
            raise APIRequestError("Failed API request POST call: received HTTP 500.")

    orchestrator = BridgeOrchestrator(RejectingClient(calls=scenario_calls), FakeZoneCache({"JJ0103": 7}))

    outcome = orchestrator.handle(coffee_order)

    assert outcome.failed_stage is BridgeState.DISPATCHING
    assert outcome.response_text == "Error handling request: APIRequestError"


def test_unexpected_errors_are_contained(coffee_order):
    class BrokenZones:
        def resolve_zone(self, location):
            raise OSError("disk full")

    orchestrator = BridgeOrchestrator(FakeKaiClient(), BrokenZones())

    outcome = orchestrator.handle(coffee_order)

    assert outcome.state is BridgeState.FAILED
    assert outcome.response_text == "Error handling request: OSError"


def test_failure_log_carries_traceback(coffee_order, caplog):
    orchestrator, _ = _orchestrator([])

    with caplog.at_level(logging.ERROR):
        orchestrator.handle(coffee_order)

    record = caplog.records[-1]
    assert record.exc_info is not None
    assert record.exc_info[0] is UnsupportedDrinkError
    assert "Traceback" in caplog.text
