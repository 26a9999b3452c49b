"""
Streamlit Frontend for Split Calculator

A thin page over SplitSession. It collects input, calls one session
operation per user action, and renders the result. No amounts are
computed here.

Run:
    streamlit run app/main.py
"""

import html

import streamlit as st

from splitcalc.models.ledger import LedgerResult
from splitcalc.orchestrator import SplitSession, create_session


# Page configuration
st.set_page_config(
    page_title="Split Calculator",
    page_icon="💸",
    layout="centered",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .person-card {
        padding: 12px;
        background-color: #f4f6f8;
        border-radius: 10px;
        text-align: center;
        margin-bottom: 8px;
    }
    .grand-total {
        font-size: 1.6em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def get_session() -> SplitSession:
    """One session per browser tab, kept in session_state."""
    if "split_session" not in st.session_state:
        st.session_state.split_session = create_session()
    return st.session_state.split_session


def notify(session: SplitSession, result) -> None:
    """Show a result's message as a toast."""
    text = session.describe(result) if isinstance(result, LedgerResult) else result.message
    st.toast(text, icon="✅" if result.success else "⚠️")


def render_people(session: SplitSession):
    """People section: add form and owed-amount cards."""
    with st.form("add_person", clear_on_submit=True):
        col1, col2 = st.columns([4, 1])
        name = col1.text_input("Add a person...", label_visibility="collapsed",
                               placeholder="Add a person...")
        if col2.form_submit_button("Add"):
            notify(session, session.add_person(name))

    people = session.person_views()
    if not people:
        return
    cols = st.columns(min(len(people), 4))
    for i, person in enumerate(people):
        with cols[i % len(cols)]:
            st.markdown(
                f'<div class="person-card"><p>{html.escape(person.name)}</p>'
                f'<span>{session.format(person.owed_amount)}</span></div>',
                unsafe_allow_html=True,
            )
            if st.button("Remove", key=f"remove_person_{person.name}"):
                notify(session, session.remove_person(person.name))
                st.rerun()


def render_item_form(session: SplitSession):
    """New item form with a checkbox per person."""
    with st.form("add_item", clear_on_submit=True):
        col1, col2, col3 = st.columns([3, 2, 1])
        name = col1.text_input("Item Name")
        price = col2.text_input("Price")
        quantity = col3.number_input("Qty", min_value=1, value=1, step=1)

        selected = [
            person for person in session.people
            if st.checkbox(person, key=f"new_item_{person}")
        ]
        if st.form_submit_button("➕ Add Item"):
            notify(session, session.add_item(name, price, quantity, selected))


def render_items(session: SplitSession):
    """Item cards with per-item sharer checkboxes and delete buttons."""
    for item in session.items:
        with st.container(border=True):
            top_left, top_right = st.columns([5, 1])
            top_left.markdown(f"**{item.name}** · {session.format(item.unit_price)}")
            if top_right.button("🗑️", key=f"delete_{item.item_id}", help="Remove item"):
                notify(session, session.remove_item(item.item_id))
                st.rerun()

            st.caption(f"Quantity: {item.quantity}x")

            st.write("Shared by:")
            for person in session.people:
                key = f"share_{item.item_id}_{person}"
                checked = st.checkbox(person, value=person in item.shared_by, key=key)
                if checked != (person in item.shared_by):
                    notify(session, session.toggle_sharer(item.item_id, person, checked))
                    st.rerun()

            st.write(f"Total: {session.format(item.total)}")


def render_footer(session: SplitSession):
    """Grand total and CSV download."""
    st.markdown(
        f'<p class="grand-total">Grand Total: {session.format(session.grand_total)}</p>',
        unsafe_allow_html=True,
    )
    unassigned = session.allocation.unassigned_total
    if session.items and unassigned > 0.005:
        st.warning(f"{session.format(unassigned)} is not assigned to anyone yet.")

    if st.button("📄 Export to CSV"):
        result = session.export_csv()
        if result.success:
            st.download_button(
                "Download",
                data=result.to_bytes(),
                file_name=result.filename,
                mime="text/csv",
            )
        notify(session, result)


def main():
    """Main application entry point."""
    session = get_session()

    st.title("💸 Split Calculator")
    render_people(session)
    st.divider()
    render_item_form(session)
    render_items(session)
    st.divider()
    render_footer(session)


if __name__ == "__main__":
    main()
