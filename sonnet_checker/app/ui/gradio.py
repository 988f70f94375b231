"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import gradio as gr

from sonnet_checker.core.forms import FORMS, UnknownFormError

if TYPE_CHECKING:
    from ..app import SonnetCheckerApp

SAMPLE_SONNET = """Shall I compare thee to a summer's day
Thou art more lovely and more temperate
Rough winds do shake the darling buds of May
And summer's lease hath all too short a date
Sometime too hot the eye of heaven shines
And often is his gold complexion dimmed
And every fair from fair sometime declines
By chance or nature's changing course untrimmed
But thy eternal summer shall not fade
Nor lose possession of that fair thou owest
Nor shall death brag thou wanderest in his shade
When in eternal lines to time thou grow
So long as men can breathe or eyes can see
So long lives this and this gives life to thee"""


def create_interface(app: "SonnetCheckerApp") -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    def analyze_interface(text: str, form_id: str, strict: bool) -> str:
        if not text or not text.strip():
            return "Please enter a sonnet to analyze."
        try:
            return app.analyze_to_markdown(text, form_id, strict=strict)
        except UnknownFormError as exc:
            return f"❌ {exc}"

    def add_word_interface(word: str, phonemes: str) -> str:
        try:
            sequence = app.add_pronunciation(word, phonemes or "")
        except ValueError as exc:
            return f"❌ {exc}"
        return f"Added **{word}**: `{' '.join(str(token) for token in sequence)}`"

    form_choices: list[Tuple[str, str]] = [(form.name, key) for key, form in FORMS.items()]
    default_form = app.settings.default_form if app.settings.default_form in FORMS else "shakespearean"

    with gr.Blocks(title="Sonnet Checker") as interface:
        gr.Markdown("# Sonnet Checker\nCheck a poem's meter and rhyme scheme.")
        with gr.Row():
            with gr.Column(scale=1):
                poem = gr.Textbox(label="Poem", lines=16, value=SAMPLE_SONNET)
                form = gr.Dropdown(choices=form_choices, value=default_form, label="Form")
                strict = gr.Checkbox(value=app.settings.strict, label="Strict syllable count")
                analyze_button = gr.Button("Analyze", variant="primary")
                with gr.Accordion("Add a pronunciation", open=False):
                    new_word = gr.Textbox(label="Word")
                    new_phonemes = gr.Textbox(label="Phonemes", placeholder="HH AH0 L OW1")
                    add_button = gr.Button("Add")
                    add_status = gr.Markdown()
            with gr.Column(scale=1):
                report = gr.Markdown("Enter a poem and click **Analyze**.")

        analyze_button.click(analyze_interface, inputs=[poem, form, strict], outputs=report)
        add_button.click(add_word_interface, inputs=[new_word, new_phonemes], outputs=add_status)

    return interface


__all__ = ["SAMPLE_SONNET", "create_interface"]
