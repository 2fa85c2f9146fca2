"""BDD step definitions for batch bill processing."""

from collections.abc import Callable
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from billtrail.adapters.documents import FilesystemDocumentSource
from billtrail.adapters.serialization import JsonSerializer
from billtrail.adapters.storage import SqliteBillStore
from billtrail.domain import services
from billtrail.domain.errors import PipelineError
from billtrail.domain.hashing import compute_hash
from billtrail.domain.models import ProcessingOutcome
from billtrail.domain.services import BatchOrchestrator


@scenario("features/batch.feature", "Fresh folder with one valid bill")
def test_fresh_folder() -> None:
    pass


@scenario("features/batch.feature", "Processing the same folder twice")
def test_idempotent_rerun() -> None:
    pass


@scenario("features/batch.feature", "A document without a billing period")
def test_missing_period() -> None:
    pass


@scenario("features/batch.feature", "An unreadable bill among valid ones")
def test_unreadable_bill() -> None:
    pass


@scenario("features/batch.feature", "An anniversary bill is an offered period")
def test_offered_period() -> None:
    pass


@pytest.fixture
def context(tmp_path: Path) -> dict:
    """Shared test context with an inbox folder."""
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    return {"tmp_path": tmp_path, "inbox": inbox}


@given("an orchestrator backed by a temporary database")
def setup_orchestrator(context: dict) -> None:
    context["store"] = SqliteBillStore(context["tmp_path"] / "bills.db")
    context["orchestrator"] = BatchOrchestrator(
        source=FilesystemDocumentSource(),
        store=context["store"],
        serializer=JsonSerializer(),
    )


@given(
    parsers.parse(
        'a bill "{name}" for "{period}" with {units:d} kWh totalling "{total}"'
    )
)
def given_bill(
    context: dict, bill_text: Callable[..., str], name: str, period: str, units: int, total: str
) -> None:
    text = bill_text(period=period, units=units, total=total)
    (context["inbox"] / name).write_text(text, encoding="utf-8")


@given(parsers.parse('a document "{name}" without a billing period'))
def given_no_period(context: dict, bill_text: Callable[..., str], name: str) -> None:
    text = bill_text(period="January 2025")
    (context["inbox"] / name).write_text(text, encoding="utf-8")


@given(parsers.parse('an unreadable bill "{name}"'))
def given_unreadable(
    context: dict,
    bill_text: Callable[..., str],
    monkeypatch: pytest.MonkeyPatch,
    name: str,
) -> None:
    locked = context["inbox"] / name
    locked.write_text(bill_text(units=99), encoding="utf-8")

    # Permission bits are ignored when tests run as root
    def guarded_hash(path: Path) -> str:
        if path.name == name:
            raise PipelineError.file_access(path, PermissionError(13, "Permission denied"))
        return compute_hash(path)

    monkeypatch.setattr(services, "compute_hash", guarded_hash)


@given(parsers.parse('an anniversary bill "{name}" for "{period}"'))
def given_anniversary(context: dict, bill_text: Callable[..., str], name: str, period: str) -> None:
    text = bill_text(
        period=period,
        units=200,
        energy="0,00",
        taxes="0,00",
        total="0,00",
        extra="Oferta Tarifa Aniversário",
    )
    (context["inbox"] / name).write_text(text, encoding="utf-8")


@when("I process the folder")
@when("I process the folder again")
def process_folder(context: dict) -> None:
    context["outcome"] = context["orchestrator"].process(context["inbox"], "*.txt")


@then(parsers.re(r"(?P<count>\d+) files? should be found"), converters={"count": int})
def files_found(context: dict, count: int) -> None:
    outcome: ProcessingOutcome = context["outcome"]
    assert outcome.files_found == count


@then(parsers.re(r"(?P<count>\d+) files? should be processed"), converters={"count": int})
def files_processed(context: dict, count: int) -> None:
    outcome: ProcessingOutcome = context["outcome"]
    assert outcome.processed == count, f"Failures: {outcome.failure_messages}"


@then(parsers.re(r"(?P<count>\d+) files? should be skipped"), converters={"count": int})
def files_skipped(context: dict, count: int) -> None:
    outcome: ProcessingOutcome = context["outcome"]
    assert outcome.skipped == count


@then(parsers.re(r"(?P<count>\d+) files? should have failed"), converters={"count": int})
def files_failed(context: dict, count: int) -> None:
    outcome: ProcessingOutcome = context["outcome"]
    assert outcome.failed == count
    assert outcome.consistent


@then(parsers.parse('the failure for "{name}" should mention "{text}"'))
def failure_mentions(context: dict, name: str, text: str) -> None:
    outcome: ProcessingOutcome = context["outcome"]
    matching = [m for m in outcome.failure_messages if m.startswith(f"{name}: ")]
    assert matching, f"No failure for {name}, got: {outcome.failure_messages}"
    assert text in matching[0]


@then(parsers.re(r"the store should hold (?P<count>\d+) bills?"), converters={"count": int})
def store_count(context: dict, count: int) -> None:
    assert context["store"].get_total_count() == count


@then(parsers.parse('the stored bill should be "{summary}"'))
def stored_bill(context: dict, summary: str) -> None:
    stored = context["store"].get_all_bills()
    assert [bill.summary() for bill in stored] == [summary]
