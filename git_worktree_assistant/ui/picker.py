"""Full-screen textual pickers for interactive terminals."""

from typing import Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, OptionList, Static
from textual.widgets.option_list import Option

from git_worktree_assistant.models.option import PickableOption


def option_prompt(option: PickableOption) -> Text:
    """Label, dimmed description and detail line as one rich Text."""
    text = Text(option.label, style="bold")
    if option.description:
        text.append(f"  {option.description}", style="dim")
    if option.detail:
        text.append(f"\n{option.detail}", style="italic dim")
    return text


class PickerApp(App[Optional[int]]):
    """Pick one option; returns its index, or None on escape."""

    DEFAULT_CSS = """
    #placeholder {
        padding: 0 1;
        color: $text-muted;
    }

    OptionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, title: str, options: Sequence[PickableOption], placeholder: str = ""):
        super().__init__()
        self.picker_title = title
        self.picker_options = list(options)
        self.placeholder = placeholder

    def compose(self) -> ComposeResult:
        yield Header()
        if self.placeholder:
            yield Static(self.placeholder, id="placeholder")
        # None renders as a separator line
        yield OptionList(
            *[
                None if option.is_separator else Option(option_prompt(option), id=str(i))
                for i, option in enumerate(self.picker_options)
            ]
        )
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.picker_title
        self.query_one(OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(int(event.option.id))

    def action_cancel(self) -> None:
        self.exit(None)


class InputApp(App[Optional[str]]):
    """Ask for one line of text; returns it, or None on escape."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, title: str, prompt: str = "", value: str = ""):
        super().__init__()
        self.input_title = title
        self.input_prompt = prompt
        self.initial_value = value

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(value=self.initial_value, placeholder=self.input_prompt)
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.input_title
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.exit(event.value)

    def action_cancel(self) -> None:
        self.exit(None)


class TextualChooser:
    """Chooser that runs one short-lived textual app per question."""

    def choose(
        self, title: str, options: Sequence[PickableOption], placeholder: str = ""
    ) -> Optional[PickableOption]:
        index = PickerApp(title, options, placeholder).run()
        if index is None:
            return None
        return options[index]

    def ask(self, title: str, prompt: str = "", value: str = "") -> Optional[str]:
        answer = InputApp(title, prompt, value).run()
        answer = (answer or "").strip()
        return answer or None
