import gradio as gr
from functools import partial

from order_export_template.catalogue import default_catalogue
from order_export_template.columns import ColumnSet
from order_export_template.handlers import (
    COLUMN_TABLE_HEADERS,
    LAYOUT_BY_FIELD,
    LAYOUT_BY_ORDER,
    cancel_fields_handler,
    column_choices,
    column_table,
    export_data_handler,
    handle_root_change,
    load_orders_handler,
    open_picker_handler,
    remove_column_handler,
    render_preview,
    reorder_handler,
    save_fields_handler,
    search_fields_handler,
    select_fields_handler,
)
from order_export_template.logging_config import configure_logging
from order_export_template.picker import PickerState
from order_export_template.records import ROOT
from order_export_template.settings import Settings

SETTINGS = Settings.from_env()
configure_logging(SETTINGS)

CATALOGUE = default_catalogue()
INITIAL_COLUMNS = ColumnSet(CATALOGUE)

# --- UI Definition ---
with gr.Blocks(title="Order Export Template") as demo:
    gr.Markdown("# Order Export Template")
    gr.Markdown("Upload exported orders, choose and order the columns, then download a CSV.")

    # State (copied per session)
    json_data_state = gr.State()
    records_state = gr.State(value=[])
    column_set_state = gr.State(value=INITIAL_COLUMNS)
    picker_state = gr.State(value=PickerState())

    with gr.Row():
        # Left Panel: Input & Columns
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload Orders JSON", file_types=[".json"])
            root_path_input = gr.Textbox(label="Orders Root Path", value=ROOT)
            status_msg = gr.Textbox(label="Status", interactive=False)
            document_count = gr.Textbox(label="Document Count", interactive=False)

            gr.Markdown("### 2. Columns")
            columns_table = gr.Dataframe(
                headers=COLUMN_TABLE_HEADERS,
                value=column_table(INITIAL_COLUMNS),
                datatype=["str", "str", "str"],
                interactive=False,
                label="Active Columns",
            )
            with gr.Row():
                move_from = gr.Dropdown(label="Move column", choices=column_choices(INITIAL_COLUMNS))
                move_to = gr.Dropdown(label="To position of", choices=column_choices(INITIAL_COLUMNS))
            move_btn = gr.Button("Move")
            with gr.Row():
                remove_choice = gr.Dropdown(
                    label="Remove column",
                    choices=[(c.label, c.path) for c in INITIAL_COLUMNS],
                )
                remove_btn = gr.Button("Remove")

            add_field_btn = gr.Button("Add field")
            with gr.Group(visible=False) as picker_panel:
                gr.Markdown("#### Add export fields")
                field_search = gr.Textbox(label="Search", placeholder="Search fields")
                field_choices = gr.CheckboxGroup(label="Available fields", choices=[])
                with gr.Row():
                    cancel_fields_btn = gr.Button("Cancel")
                    save_fields_btn = gr.Button("Save", variant="primary")

        # Right Panel: Preview & Export
        with gr.Column(scale=2):
            gr.Markdown("### 3. Preview")
            layout_choice = gr.Radio(
                choices=[LAYOUT_BY_FIELD, LAYOUT_BY_ORDER],
                value=LAYOUT_BY_FIELD,
                label="Layout",
            )
            preview_table = gr.Dataframe(
                value=render_preview(INITIAL_COLUMNS, [], LAYOUT_BY_FIELD),
                interactive=False,
                label="Preview",
            )

            gr.Markdown("### 4. Export")
            template_name = gr.Textbox(
                label="Order Export Template Name",
                placeholder=SETTINGS.template_name,
            )
            export_btn = gr.Button("Download CSV", variant="primary")
            download_output = gr.File(label="Download Result")

    column_outputs = [column_set_state, columns_table, move_from, move_to, remove_choice, preview_table]
    picker_outputs = [picker_state, picker_panel, field_search, field_choices]

    file_input.upload(
        fn=partial(load_orders_handler, settings=SETTINGS),
        inputs=[file_input, root_path_input, column_set_state, layout_choice],
        outputs=[json_data_state, records_state, status_msg, document_count, preview_table],
    )

    root_path_input.submit(
        fn=partial(handle_root_change, settings=SETTINGS),
        inputs=[json_data_state, root_path_input, column_set_state, layout_choice],
        outputs=[records_state, document_count, preview_table],
    )

    layout_choice.change(
        fn=lambda column_set, records, layout: render_preview(column_set, records, layout, SETTINGS.preview_limit),
        inputs=[column_set_state, records_state, layout_choice],
        outputs=[preview_table],
    )

    move_btn.click(
        fn=partial(reorder_handler, settings=SETTINGS),
        inputs=[column_set_state, move_from, move_to, records_state, layout_choice],
        outputs=column_outputs,
    )

    remove_btn.click(
        fn=partial(remove_column_handler, settings=SETTINGS),
        inputs=[column_set_state, remove_choice, records_state, layout_choice],
        outputs=column_outputs,
    )

    add_field_btn.click(
        fn=partial(open_picker_handler, catalogue=CATALOGUE),
        inputs=[picker_state, column_set_state],
        outputs=picker_outputs,
    )

    field_search.input(
        fn=partial(search_fields_handler, catalogue=CATALOGUE),
        inputs=[picker_state, field_search],
        outputs=picker_outputs,
    )

    field_choices.input(
        fn=partial(select_fields_handler, catalogue=CATALOGUE),
        inputs=[picker_state, field_choices],
        outputs=[picker_state],
    )

    save_fields_btn.click(
        fn=partial(save_fields_handler, catalogue=CATALOGUE, settings=SETTINGS),
        inputs=[picker_state, column_set_state, records_state, layout_choice],
        outputs=picker_outputs + column_outputs,
    )

    cancel_fields_btn.click(
        fn=partial(cancel_fields_handler, catalogue=CATALOGUE),
        inputs=[picker_state, column_set_state],
        outputs=picker_outputs,
    )

    export_btn.click(
        fn=partial(export_data_handler, settings=SETTINGS),
        inputs=[column_set_state, records_state, template_name],
        outputs=[download_output, status_msg],
    )

# One event at a time per handler keeps column set mutations single-writer
demo.queue(default_concurrency_limit=1)

if __name__ == "__main__":
    demo.launch()
