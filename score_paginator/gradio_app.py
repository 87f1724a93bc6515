"""Gradio web interface for previewing a strip's page layout.

Upload a continuous strip, then adjust the detection threshold, page width and
rows per page to see where measures are detected, where rows are cut and what
the resulting pages look like. The rendered pages can be downloaded.

The interface is organized by processing stage:
- Strip upload
- Measure detection with acceptance level control
- Page layout with width and row controls, page previews and downloads
"""

import logging
from uuid import uuid4

import gradio as gr

from score_paginator.models import DetectionParams, LayoutParams
from score_paginator.ui_updates import (
    cleanup_session,
    load_strip_file,
    load_uploaded_strip,
    update_detection_view,
    update_pages_view,
)

logger = logging.getLogger(__name__)

_detection_defaults = DetectionParams()
_layout_defaults = LayoutParams()


def on_strip_upload(image, session_id: str, acceptance_level, page_width, rows):
    """Register an uploaded strip and refresh every view.

    Returns:
        List of outputs: strip ID, strip view, detection overlay, measure
        count, layout overlay, page previews, page files and status text.
    """
    strip_id, strip_view = load_uploaded_strip(image)
    return _refresh_views(
        strip_id, strip_view, session_id, acceptance_level, page_width, rows
    )


def on_strip_file(path, session_id: str, acceptance_level, page_width, rows):
    """Register a strip picked as a file and refresh every view.

    Returns:
        The same outputs as :func:`on_strip_upload`.
    """
    strip_id, strip_view = load_strip_file(path)
    return _refresh_views(
        strip_id, strip_view, session_id, acceptance_level, page_width, rows
    )


def _refresh_views(strip_id, strip_view, session_id, acceptance_level, page_width, rows):
    overlay, count = update_detection_view(strip_id, int(acceptance_level))
    layout_view, previews, paths, status = update_pages_view(
        strip_id, session_id, int(acceptance_level), page_width, rows
    )
    return [strip_id, strip_view, overlay, count, layout_view, previews, paths, status]


def cleanup_session_handler(session_id: str | None) -> None:
    """Clean up session files when the user disconnects."""
    if session_id is None:
        return
    try:
        cleanup_session(session_id)
    except OSError as e:
        logger.warning(f"Cleanup failed for session {session_id}: {e}")


def create_gradio_interface() -> gr.Blocks:
    """Create and configure the preview web interface.

    Returns:
        Configured Gradio Blocks interface ready for launching.
    """
    with gr.Blocks(title="Score Paginator", delete_cache=(1800, 3600)) as interface:
        gr.Markdown("# Score Paginator")
        gr.Markdown(
            "Upload a continuous score strip and tune how it is cut into pages. "
            "Blue lines are detected measures, red lines are row cuts."
        )

        # Holds the current strip ID across callbacks
        strip_state = gr.State(None)

        # Unique session ID for per-session file management, set on page load.
        # Its page files are removed when the session state is deleted.
        session_state = gr.State(None, delete_callback=cleanup_session_handler)

        # 1. Strip
        with gr.Group():
            gr.Markdown("### 1. Strip")
            strip_input = gr.Image(
                label="Continuous Strip",
                type="numpy",
                image_mode="RGBA",
                height=160,
            )
            strip_file = gr.File(
                label="Or Open a Strip File",
                file_types=[".png"],
                type="filepath",
            )
            strip_view = gr.Image(label="Strip on White", height=160)

        # 2. Measure Detection
        with gr.Group():
            gr.Markdown("### 2. Measure Detection")
            acceptance_level = gr.Slider(
                minimum=0,
                maximum=255,
                value=_detection_defaults.acceptance_level,
                step=1,
                label="Acceptance Level",
                info="Minimum ink intensity on the centre line for a barline.",
            )
            measure_count = gr.Textbox(label="Detected Measures", value="No strip loaded")
            detection_view = gr.Image(label="Detected Measures", height=160)

        # 3. Page Layout
        with gr.Group():
            gr.Markdown("### 3. Page Layout")
            with gr.Row():
                page_width = gr.Slider(
                    200,
                    4000,
                    value=_layout_defaults.page_width,
                    step=10,
                    label="Page Width",
                    info="Width of each page in pixels.",
                )
                rows_per_page = gr.Slider(
                    1,
                    30,
                    value=_layout_defaults.rows_per_page,
                    step=1,
                    label="Rows per Page",
                    info="Number of strip rows stacked on a page.",
                )
            status = gr.Textbox(label="Layout", value="No strip loaded")
            layout_view = gr.Image(label="Row Cuts", height=160)
            page_gallery = gr.Gallery(label="Pages", columns=3, height=480)
            page_files = gr.File(label="Download Pages", file_count="multiple")

        layout_inputs = [strip_state, session_state, acceptance_level, page_width, rows_per_page]
        layout_outputs = [layout_view, page_gallery, page_files, status]

        interface.load(fn=lambda: str(uuid4()), outputs=[session_state])

        strip_outputs = [
            strip_state,
            strip_view,
            detection_view,
            measure_count,
            layout_view,
            page_gallery,
            page_files,
            status,
        ]
        strip_input.change(
            fn=on_strip_upload,
            inputs=[strip_input, session_state, acceptance_level, page_width, rows_per_page],
            outputs=strip_outputs,
        )
        strip_file.change(
            fn=on_strip_file,
            inputs=[strip_file, session_state, acceptance_level, page_width, rows_per_page],
            outputs=strip_outputs,
        )

        acceptance_level.change(
            fn=update_detection_view,
            inputs=[strip_state, acceptance_level],
            outputs=[detection_view, measure_count],
        )

        for control in [acceptance_level, page_width, rows_per_page]:
            control.change(
                fn=update_pages_view, inputs=layout_inputs, outputs=layout_outputs
            )

    return interface


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    demo = create_gradio_interface()
    demo.launch(share=False, show_error=True, server_port=7860)


if __name__ == "__main__":
    main()
