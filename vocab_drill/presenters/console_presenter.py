"""Console presenter for CLI output."""

from vocab_drill.models import (
    AnswerOutcome,
    CompletionResult,
    GroupStats,
    OverallStats,
    VocabularyItem,
)


class ConsolePresenter:
    """Present output to console (CLI implementation)."""

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        print(message)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        print(f"[OK] {message}")

    def show_warning(self, message: str) -> None:
        """Display a warning message."""
        print(f"[WARN] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        print(f"[ERROR] {message}")

    def show_prompt(self, item: VocabularyItem, remaining: int) -> None:
        """Display the item currently being drilled."""
        print(f"\n[{remaining} left] {item.translation}")
        if item.example_sentences:
            hint = item.example_sentences[0].replace(item.term, "_" * len(item.term))
            print(f"  e.g. {hint}")

    def show_answer_feedback(self, outcome: AnswerOutcome) -> None:
        """Display the judgement for a submitted answer."""
        if outcome.correct:
            suffix = " - mastered!" if outcome.mastered_this_answer else ""
            print(f"  [OK] Correct{suffix}")
        elif outcome.near_match:
            hint = f" Watch the accent: {outcome.accent_hint}" if outcome.accent_hint else ""
            print(f"  [ALMOST] {outcome.expected}.{hint}")
        else:
            print(f"  [X] {outcome.expected}")

    def show_completion(self, result: CompletionResult) -> None:
        """Display the summary of a completed session."""
        print("\nSession Complete:")
        print(f"  Answers: {result.total_answers}")
        print(f"  Accuracy: {result.accuracy}%")
        print(f"  Mastered this session: {result.mastered_count}")
        print(f"  Levels up: {len(result.advanced)}, down: {len(result.dropped)}")
        print(f"  Daily streak: {result.daily_streak} day(s)")
        if result.unlocked_group_id:
            print("  [OK] Next group unlocked")

    def show_stats(self, overall: OverallStats, groups: list[GroupStats]) -> None:
        """Display overall and per-group statistics."""
        print("\nProgress:")
        print(f"  Items: {overall.total_items} ({overall.muted_items} muted)")
        print(
            f"  New: {overall.new_items}  Learning: {overall.learning_items}  "
            f"Learned: {overall.learned_items}"
        )
        print(f"  Accuracy: {overall.overall_accuracy}%")

        if groups:
            print("\nGroups:")
            for i, group in enumerate(groups, 1):
                lock = "    " if group.unlocked else "[L] "
                print(
                    f"  {i:2d}. {lock}{group.name:15s} {group.total_items:3d} items, "
                    f"{group.due_items:3d} due, {group.accuracy:3d}%, "
                    f"{group.completed_sessions} sessions"
                )


class ConsoleProgressCallback:
    """Console implementation of progress callback."""

    def __init__(self):
        """Initialize the progress callback."""
        self.total = 0
        self.current = 0
        self.description = ""

    def on_start(self, total: int, description: str) -> None:
        """Called when an operation starts."""
        self.total = total
        self.current = 0
        self.description = description
        print(f"\n{description}...")

    def on_progress(self, current: int, item_description: str) -> None:
        """Called when an item is processed."""
        self.current = current
        print(f"  [{current}/{self.total}] {item_description}")

    def on_complete(self) -> None:
        """Called when an operation completes."""
        print(f"  [OK] Complete: {self.current}/{self.total}")

    def on_error(self, item_description: str, error_message: str) -> None:
        """Called when the API could not serve a pair."""
        print(f"  [WARN] {item_description}: {error_message}")
