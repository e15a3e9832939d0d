"""
Streamlit Frontend for Homebook

Two pages, one per app: the expense ledger and the to-do list.

Streamlit reruns the whole script on every interaction, so each session
keeps its documents and controllers in st.session_state. Widgets are
mirrored into document elements before an element is clicked, and the
document is read back afterwards. All decisions stay in the controllers;
this file only moves values between widgets and elements.
"""

import streamlit as st

from homebook.config import validate_all_settings
from homebook.models.expense import ExpenseType
from homebook.models.task import TaskFilter
from homebook.orchestrator import create_app_components
from homebook.ui.documents import EXPENSE_FORM_IDS
from homebook.ui.dom import Document, Element, escape_html


# Page configuration
st.set_page_config(
    page_title="Homebook",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .success-box {
        padding: 12px 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 6px 0;
    }
    .danger-box {
        padding: 12px 20px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 6px 0;
    }
    .info-box {
        padding: 12px 20px;
        background-color: #d1ecf1;
        border-radius: 10px;
        border-left: 5px solid #17a2b8;
        margin: 6px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
    .completed-task {
        text-decoration: line-through;
        color: #888;
    }
</style>
""", unsafe_allow_html=True)


def get_components():
    """Get or create this session's apps."""
    if "apps" not in st.session_state:
        st.session_state.apps = create_app_components()
    return st.session_state.apps


def element(document: Document, element_id: str) -> Element:
    found = document.get_element_by_id(element_id)
    if found is None:
        raise KeyError(f"Missing element #{element_id}")
    return found


def render_toasts(controller_notifications):
    """Show the toasts that are still alive."""
    for toast in controller_notifications.active():
        title = f"<strong>{escape_html(toast.title)}</strong><br>" if toast.title else ""
        st.markdown(
            f'<div class="{toast.level.value}-box">{title}{escape_html(toast.message)}</div>',
            unsafe_allow_html=True,
        )


# =============================================================================
# EXPENSES
# =============================================================================

def _expense_widget_key(field_id: str) -> str:
    return f"expense_{field_id}"


def _push_expense_form(document: Document):
    for field_id in EXPENSE_FORM_IDS:
        element(document, field_id).value = st.session_state.get(_expense_widget_key(field_id)) or ""


def _pull_expense_form(document: Document):
    for field_id in EXPENSE_FORM_IDS:
        st.session_state[_expense_widget_key(field_id)] = element(document, field_id).value


def _mask_expense_value(document: Document):
    value_el = element(document, "value")
    value_el.type_text(st.session_state.get(_expense_widget_key("value")) or "")
    st.session_state[_expense_widget_key("value")] = value_el.value


def _click_expense(document: Document, target: Element):
    _push_expense_form(document)
    target.click()
    _pull_expense_form(document)


def render_expenses_page(expense_app):
    """Render the expense ledger page."""
    document, controller = expense_app
    st.title("💸 Expenses")
    st.markdown("Register what you spend, then search or review the ledger.")

    render_toasts(controller.view.notifications)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.text_input("Year", key=_expense_widget_key("year"), placeholder="2026")
    with col2:
        st.text_input("Month", key=_expense_widget_key("month"), placeholder="1")
    with col3:
        st.text_input("Day", key=_expense_widget_key("day"), placeholder="5")

    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        st.selectbox(
            "Type",
            options=[""] + [code.value for code in ExpenseType],
            format_func=lambda code: "Choose..." if not code else ExpenseType(code).label,
            key=_expense_widget_key("type"),
        )
    with col2:
        st.text_input("Description", key=_expense_widget_key("description"))
    with col3:
        st.text_input(
            "Value",
            key=_expense_widget_key("value"),
            placeholder="R$ 0,00",
            on_change=_mask_expense_value,
            args=(document,),
        )

    col1, col2 = st.columns(2)
    with col1:
        st.button(
            "✅ Register",
            type="primary",
            on_click=_click_expense,
            args=(document, element(document, "register-expense")),
        )
    with col2:
        st.button(
            "🔍 Search",
            on_click=_click_expense,
            args=(document, element(document, "search-expense")),
        )

    st.markdown("---")

    rows = element(document, "expense-list").children
    if not rows:
        st.info("📋 No expenses to show.")
    for row in rows:
        cells = row.children
        date_col, type_col, desc_col, value_col, action_col = st.columns([2, 2, 4, 2, 1])
        date_col.write(cells[0].text_content)
        type_col.write(cells[1].text_content)
        desc_col.write(cells[2].text_content)
        value_col.write(cells[3].text_content)
        delete_button = cells[4].children[0]
        action_col.button(
            "✖",
            key=f"delete_expense_{row.dataset['id']}",
            on_click=_click_expense,
            args=(document, delete_button),
        )

    st.markdown(
        f'<div class="big-number">{element(document, "expense-total").text_content}</div>',
        unsafe_allow_html=True,
    )


# =============================================================================
# TASKS
# =============================================================================

def _submit_task(document: Document):
    input_el = element(document, "item-input")
    input_el.value = st.session_state.get("task_input") or ""
    element(document, "todo-add").submit()
    st.session_state.task_input = input_el.value


def _change_task_filter(document: Document):
    wanted = st.session_state.task_filter
    for button in document.query_all_by_class("filter-btn"):
        if button.dataset.get("filter") == wanted:
            button.click()


def _click_task_control(li: Element, action: str):
    control = li.find(lambda el: el.dataset.get("action") == action)
    if control is not None:
        control.click()


def _save_task_edit(li: Element):
    edit_input = li.query_by_class("editInput")
    edit_input.value = st.session_state.get(f"edit_{li.dataset['id']}") or ""
    _click_task_control(li, "containerEditButton")


def render_tasks_page(task_app):
    """Render the to-do list page."""
    document, controller = task_app
    st.title("✅ Tasks")

    render_toasts(controller.notifications)

    col1, col2 = st.columns([4, 1])
    with col1:
        st.text_input("New task", key="task_input", placeholder="What needs doing?")
    with col2:
        st.button("➕ Add", type="primary", on_click=_submit_task, args=(document,))

    st.radio(
        "Show",
        options=[f.value for f in TaskFilter],
        format_func=str.capitalize,
        horizontal=True,
        key="task_filter",
        index=[f.value for f in TaskFilter].index(controller.filter.value),
        on_change=_change_task_filter,
        args=(document,),
    )

    st.markdown("---")

    for li in element(document, "todo-list").children:
        if li.has_class("todo-empty"):
            st.info(li.text_content)
            continue

        task_id = li.dataset["id"]
        completed = li.has_class("completed")
        name = li.query_by_class("task-name").text_content

        check_col, name_col, edit_col, delete_col = st.columns([1, 8, 1, 1])
        check_col.button(
            "☑" if completed else "☐",
            key=f"toggle_{task_id}",
            on_click=_click_task_control,
            args=(li, "checkButton"),
        )
        # Escaped by Element.to_html
        name_col.markdown(
            li.query_by_class("task-name").to_html().replace(
                'class="task-name"',
                'class="task-name completed-task"' if completed else 'class="task-name"',
            ),
            unsafe_allow_html=True,
        )
        edit_col.button("✏️", key=f"edit_btn_{task_id}", on_click=_click_task_control, args=(li, "editButton"))
        delete_col.button("🗑", key=f"delete_{task_id}", on_click=_click_task_control, args=(li, "deleteButton"))

        container = li.query_by_class("editContainer")
        if container is not None and not container.hidden:
            st.text_input("Rename", value=name, key=f"edit_{task_id}")
            save_col, cancel_col = st.columns(2)
            save_col.button("Save", key=f"save_{task_id}", on_click=_save_task_edit, args=(li,))
            cancel_col.button(
                "Cancel",
                key=f"cancel_{task_id}",
                on_click=_click_task_control,
                args=(li, "containerCancelButton"),
            )

    st.markdown("---")
    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown(f"**{element(document, 'count-number').text_content}** task(s) left")
    with col2:
        st.button("🧹 Clear completed", on_click=lambda: element(document, "clear-completed").click())


# =============================================================================
# SETTINGS
# =============================================================================

def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Storage", "storage"),
        ("Notifications", "notifications"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown(
        "Configure the app with `HOMEBOOK_*` environment variables or a `.env` file. "
        "See `.env.example` for the available variables."
    )


def main():
    """Main application entry point."""
    expense_app, task_app = get_components()

    st.sidebar.title("📒 Homebook")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["💸 Expenses", "✅ Tasks", "⚙️ Settings"],
        index=0,
    )

    if page == "💸 Expenses":
        render_expenses_page(expense_app)
    elif page == "✅ Tasks":
        render_tasks_page(task_app)
    elif page == "⚙️ Settings":
        render_settings_page()


if __name__ == "__main__":
    main()
