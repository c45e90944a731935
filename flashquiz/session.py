"""
This module defines the SessionController class, which reads action tokens
from a line channel and dispatches them to the card store, the quiz engine,
the stats reporter and the card file adapter until the user exits.
"""

import logging
import random
from pathlib import Path
from typing import Callable, Dict, Optional

from rich.console import Console

from .channel import ConsoleChannel, LineChannel, TranscriptChannel
from .constants import (
    ACTION_ADD,
    ACTION_ASK,
    ACTION_EXIT,
    ACTION_EXPORT,
    ACTION_HARDEST,
    ACTION_IMPORT,
    ACTION_LOG,
    ACTION_REMOVE,
    ACTION_RESET,
    BASIC_ACTIONS,
    EXTENDED_ACTIONS,
)
from .exceptions import (
    CardFileError,
    CardFileNotFoundError,
    CardNotFoundError,
    DuplicateDefinitionError,
    DuplicateTermError,
    FlashquizError,
    InputExhaustedError,
    InsufficientCardsError,
    InvalidTrialCountError,
)
from .models import Card, TrialResult, Verdict
from .persistence import CardFileFormat, export_cards, import_cards
from .quiz import QuizEngine
from .stats import StatsReporter, describe_hardest
from .store import CardStore
from .transcript import SessionTranscript

logger = logging.getLogger(__name__)

STYLE_SUCCESS = "green"
STYLE_ERROR = "red"
STYLE_NEAR_MISS = "magenta"
STYLE_FAREWELL = "blue"


class SessionController:
    """
    Interactive flashcard session.

    The controller owns the card store for the whole session. A basic
    session offers add, remove, import, export, ask and exit and uses the
    two-field card file format. An extended session also offers log,
    hardest card and reset stats, and keeps mistake counts in card files.
    """

    def __init__(
        self,
        channel: LineChannel,
        extended: bool = True,
        store: Optional[CardStore] = None,
        rng: Optional[random.Random] = None,
        transcript: Optional[SessionTranscript] = None,
    ):
        """
        Parameters:
            channel (LineChannel): Where actions and answers are read and messages written.
            extended (bool): Enable the extended action set and the mistakes column.
            store (Optional[CardStore]): Initial cards; a new empty store when omitted.
            rng (Optional[random.Random]): Randomness for the quiz engine.
            transcript (Optional[SessionTranscript]): Transcript saved by the
                `log` action. The channel is expected to feed it.
        """
        self.channel = channel
        self.extended = extended
        self.store = store if store is not None else CardStore()
        self.engine = QuizEngine(self.store, rng=rng)
        self.reporter = StatsReporter(self.store)
        self.transcript = transcript
        self.file_format = (
            CardFileFormat.WITH_MISTAKES if extended else CardFileFormat.BASIC
        )
        self.actions = EXTENDED_ACTIONS if extended else BASIC_ACTIONS

        self._handlers: Dict[str, Callable[[], None]] = {
            ACTION_ADD: self.add_card,
            ACTION_REMOVE: self.remove_card,
            ACTION_IMPORT: self.import_from_prompt,
            ACTION_EXPORT: self.export_to_prompt,
            ACTION_ASK: self.ask,
        }
        if extended:
            self._handlers.update(
                {
                    ACTION_LOG: self.save_log,
                    ACTION_HARDEST: self.hardest_card,
                    ACTION_RESET: self.reset_stats,
                }
            )

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(
        self,
        import_from: Optional[Path] = None,
        export_to: Optional[Path] = None,
    ) -> None:
        """
        Run the action loop until `exit` or end of input at the action prompt.

        Parameters:
            import_from (Optional[Path]): Card file loaded before the first prompt.
            export_to (Optional[Path]): Card file written after the loop ends.
        """
        logger.info(
            f"Starting {'extended' if self.extended else 'basic'} session"
        )
        if import_from is not None:
            self.import_file(import_from)

        while True:
            self._say(f"Input the action ({', '.join(self.actions)}):")
            try:
                action = self.channel.read_line()
            except InputExhaustedError:
                logger.info("Input ended at the action prompt; closing session")
                break

            if action == ACTION_EXIT:
                self._say("Bye bye!", STYLE_FAREWELL)
                break

            handler = self._handlers.get(action)
            if handler is None:
                logger.debug(f"Ignoring unknown action '{action}'")
                continue
            self._dispatch(action, handler)

        if export_to is not None:
            self.export_file(export_to)
        logger.info("Session finished")

    def _dispatch(self, action: str, handler: Callable[[], None]) -> None:
        try:
            handler()
        except InputExhaustedError:
            logger.warning(f"Input ended during '{action}'")
            self._say("Input ended before the action was complete.", STYLE_ERROR)
        except FlashquizError as e:
            logger.error(f"Action '{action}' failed: {e}")
            self._say(str(e), STYLE_ERROR)

    def _say(self, text: str, style: Optional[str] = None) -> None:
        self.channel.write_line(text, style=style)

    # ------------------------------------------------------------------
    # Card management
    # ------------------------------------------------------------------

    def add_card(self) -> None:
        """Prompt for a new term and definition, re-prompting on duplicates."""
        self._say("The card:")
        while True:
            term = self.channel.read_line()
            if not term:
                self._say("The card must not be empty. Try again:", STYLE_ERROR)
            elif self.store.has_term(term):
                self._say(f"{DuplicateTermError(term)} Try again:", STYLE_ERROR)
            else:
                break

        self._say("The definition of the card:")
        while True:
            definition = self.channel.read_line()
            if not definition:
                self._say(
                    "The definition must not be empty. Try again:", STYLE_ERROR
                )
            elif self.store.has_definition(definition):
                self._say(
                    f"{DuplicateDefinitionError(definition)} Try again:",
                    STYLE_ERROR,
                )
            else:
                break

        card = self.store.add(term, definition)
        self._say(
            f'The pair ("{card.term}":"{card.definition}") has been added.',
            STYLE_SUCCESS,
        )

    def remove_card(self) -> None:
        self._say("Which card?")
        term = self.channel.read_line()
        try:
            self.store.remove(term)
        except CardNotFoundError as e:
            self._say(str(e))
            return
        self._say("The card has been removed.", STYLE_SUCCESS)

    # ------------------------------------------------------------------
    # Card files
    # ------------------------------------------------------------------

    def import_from_prompt(self) -> None:
        self._say("File name:")
        self.import_file(Path(self.channel.read_line()))

    def export_to_prompt(self) -> None:
        self._say("File name:")
        self.export_file(Path(self.channel.read_line()))

    def import_file(self, path: Path) -> None:
        """Import `path` into the store and report the outcome on the channel."""
        try:
            summary = import_cards(self.store, path, self.file_format)
        except CardFileNotFoundError:
            self._say("File not found.", STYLE_ERROR)
            return
        except CardFileError as e:
            self._say(str(e), STYLE_ERROR)
            return

        self._say(f"{summary.loaded} cards have been loaded.", STYLE_SUCCESS)
        if summary.skipped:
            self._say(
                f"Skipped {summary.skipped_count} malformed line(s).",
                STYLE_ERROR,
            )

    def export_file(self, path: Path) -> None:
        """Export the store to `path` and report the outcome on the channel."""
        try:
            written = export_cards(self.store, path, self.file_format)
        except CardFileError as e:
            self._say(str(e), STYLE_ERROR)
            return
        self._say(f"{written} cards have been saved.", STYLE_SUCCESS)

    # ------------------------------------------------------------------
    # Quiz
    # ------------------------------------------------------------------

    def ask(self) -> None:
        """Ask for a number of questions, then quiz the user that many times."""
        self._say("How many times to ask?")
        raw_count = self.channel.read_line()
        try:
            trials = int(raw_count)
        except ValueError:
            self._say(f'Invalid number of questions: "{raw_count}".', STYLE_ERROR)
            return

        try:
            for result in self.engine.run(trials, self._prompt_answer):
                self._report_trial(result)
        except InsufficientCardsError:
            self._say("Not enough cards.", STYLE_ERROR)
        except InvalidTrialCountError:
            self._say(f'Invalid number of questions: "{raw_count}".', STYLE_ERROR)

    def _prompt_answer(self, card: Card) -> str:
        self._say(f'Print the definition of "{card.term}":')
        return self.channel.read_line()

    def _report_trial(self, result: TrialResult) -> None:
        if result.is_correct:
            self._say("Correct!", STYLE_SUCCESS)
        elif result.verdict is Verdict.WRONG_MATCHES_OTHER:
            self._say(
                f'Wrong. The right answer is "{result.expected}", but your '
                f'definition is correct for "{result.other_term}".',
                STYLE_NEAR_MISS,
            )
        else:
            self._say(
                f'Wrong. The right answer is "{result.expected}".', STYLE_ERROR
            )

    # ------------------------------------------------------------------
    # Extended actions
    # ------------------------------------------------------------------

    def save_log(self) -> None:
        self._say("File name:")
        path = Path(self.channel.read_line())
        if self.transcript is None:
            self._say("Logging is not enabled for this session.", STYLE_ERROR)
            return
        try:
            self.transcript.save(path)
        except CardFileError as e:
            self._say(str(e), STYLE_ERROR)
            return
        self._say("The log has been saved.", STYLE_SUCCESS)

    def hardest_card(self) -> None:
        self._say(describe_hardest(self.reporter.hardest()))

    def reset_stats(self) -> None:
        self.reporter.reset_all()
        self._say("Card statistics have been reset.")


def create_session(
    extended: bool = True,
    color: bool = True,
    seed: Optional[int] = None,
    console: Optional[Console] = None,
) -> SessionController:
    """
    Wire a SessionController to a rich console.

    Extended sessions get a transcript, fed by wrapping the console channel.

    Parameters:
        extended (bool): Build an extended session rather than a basic one.
        color (bool): Style messages; plain text when False.
        seed (Optional[int]): Seed for the quiz engine's random draws.
        console (Optional[Console]): Console to use; a new one when omitted.
    """
    channel: LineChannel = ConsoleChannel(console=console, color=color)
    transcript: Optional[SessionTranscript] = None
    if extended:
        transcript = SessionTranscript()
        channel = TranscriptChannel(channel, transcript)

    return SessionController(
        channel=channel,
        extended=extended,
        rng=random.Random(seed),
        transcript=transcript,
    )
