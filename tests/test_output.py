# Tests for keyward.output.console and shared.console
from shared.console import KeywardConsole
from keyward.analyzers.strength import StrengthScorer
from keyward.core.history import HistoryStore
from keyward.core.models import BreachOutcome, GeneratedPassword
from keyward.output.console import KeywardConsoleOutput


def _output():
    console = KeywardConsole(record=True)
    return console, KeywardConsoleOutput(console)


def test_analysis_display_never_prints_password():
    console, output = _output()
    password = "hunter2hunter2"
    output.display_analysis(StrengthScorer().score(password), BreachOutcome.found(1234))
    text = console.export_text()
    assert "Password Analysis" in text
    assert "Breached 1,234 times" in text
    assert "Crack Time Estimates" in text
    assert password not in text


def test_meter_fills_score_plus_one_segments():
    _, output = _output()
    meter = output.strength_meter(2).plain
    assert meter.count("█") == 3 * 6
    assert "MODERATE" in meter


def test_batch_marks_strongest():
    console, output = _output()
    scorer = StrengthScorer()
    batch = [
        GeneratedPassword(password="password", analysis=scorer.score("password")),
        GeneratedPassword(password="Kx7#mQ2$vN9!pR4&wT6@", analysis=scorer.score("Kx7#mQ2$vN9!pR4&wT6@")),
    ]
    output.display_batch(batch, batch[1])
    text = console.export_text()
    assert "best" in text
    assert "Fortress" in text


def test_history_display():
    console, output = _output()
    store = HistoryStore()
    entry = store.append("abc", StrengthScorer().score("abc"))
    output.display_history(store.entries())
    text = console.export_text()
    assert entry.truncated_hash in text
    assert "Critical" in text


def test_empty_history_display():
    console, output = _output()
    output.display_history([])
    assert "No analyses recorded" in console.export_text()
