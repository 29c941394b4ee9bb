"""Streamlit UI for WeddingSeatingPlan with CSV previews, manual moves and exports."""
from __future__ import annotations

import io

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from wedding_seating_plan.checks import check_plan, move_guest
from wedding_seating_plan.csv_loader import load_all, pad_guests
from wedding_seating_plan.export import csv_bytes, format_trace, plan_dataframe, render_pdf
from wedding_seating_plan.mind_map import generate_seating_mind_map
from wedding_seating_plan.models import PlanConfiguration, SortingCriteria
from wedding_seating_plan.solver import generate

# -----------------------------
# Helpers
# -----------------------------

def uploadedfile_to_buffer(uploaded_file) -> io.StringIO | None:
    """Read a Streamlit UploadedFile into a StringIO positioned at start."""
    if uploaded_file is None:
        return None
    uploaded_file.seek(0)
    return io.StringIO(uploaded_file.read().decode("utf-8"))


def validate_columns(df: pd.DataFrame, required: list[str], file_label: str) -> bool:
    """Check required columns and show an error if any are missing."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        st.error(f"Error in {file_label}: missing columns: {', '.join(missing)}")
        return False
    return True


def preview(uploaded_file, label: str, required: list[str]) -> bool:
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False)
    st.subheader(f"{label} preview")
    st.dataframe(df, use_container_width=True)
    uploaded_file.seek(0)
    return validate_columns(df, required, label)


# -----------------------------
# Sidebar options
# -----------------------------

st.sidebar.header("Tables")
number_of_tables = st.sidebar.number_input("Number of tables (besides honor table)", min_value=0, value=5)
seats_per_table = st.sidebar.number_input("Seats per table", min_value=1, value=8)
honor_table_seats = st.sidebar.number_input("Honor table seats", min_value=0, value=8)
total_guests = st.sidebar.number_input(
    "Total guests",
    min_value=0,
    value=0,
    help="Pad the list with 'Guest N' placeholders up to this number.",
)
table_shape = st.sidebar.radio("Table shape", ["round", "square"])

st.sidebar.header("Sorting")
by_family = st.sidebar.checkbox("Keep families together", value=True)
by_role = st.sidebar.checkbox("Order by role", value=False)
by_age = st.sidebar.checkbox("Order by age", value=False)
randomize = st.sidebar.checkbox("Shuffle guests within tables", value=False)

# -----------------------------
# Main UI and previews
# -----------------------------

st.title("Wedding Seating Plan")

_guests_file = st.file_uploader("Guests CSV", type="csv")
_couples_file = st.file_uploader("Couples CSV (optional)", type="csv")
_exclusions_file = st.file_uploader("Exclusions CSV (optional)", type="csv")

inputs_ok = True
if _guests_file is not None:
    inputs_ok &= preview(_guests_file, "guests.csv", ["id", "first_name"])
if _couples_file is not None:
    inputs_ok &= preview(_couples_file, "couples.csv", ["guest1_id", "guest2_id"])
if _exclusions_file is not None:
    inputs_ok &= preview(_exclusions_file, "exclusions.csv", ["guest1_id", "guest2_id"])

run_disabled = _guests_file is None or not inputs_ok or st.session_state.get("busy", False)
run_clicked = st.button("Generate seating plan", disabled=run_disabled, key="run_button")

# -----------------------------
# Generate
# -----------------------------

if run_clicked and not run_disabled:
    st.session_state["busy"] = True
    try:
        guests, couples, exclusions = load_all(
            uploadedfile_to_buffer(_guests_file),
            uploadedfile_to_buffer(_couples_file),
            uploadedfile_to_buffer(_exclusions_file),
        )
        config = PlanConfiguration(
            total_guests=max(int(total_guests), len(guests)),
            number_of_tables=int(number_of_tables),
            seats_per_table=int(seats_per_table),
            honor_table_seats=int(honor_table_seats),
            sorting_criteria=SortingCriteria(
                by_family=by_family, by_age=by_age, by_role=by_role, random=randomize
            ),
            table_shape=table_shape,
        )
        guests = pad_guests(guests, config.total_guests)
        result = generate(guests, couples, exclusions, config)
        st.session_state["plan"] = {
            "result": result,
            "edited": result.copy(),
            "couples": couples,
            "exclusions": exclusions,
            "config": config,
        }
    except ValueError as e:
        st.error(f"Input validation error: {e}")
    finally:
        st.session_state["busy"] = False

# -----------------------------
# Results
# -----------------------------

plan = st.session_state.get("plan")
if plan is not None:
    result = plan["result"]
    if not result.success:
        st.error("The seating plan cannot be generated:")
        for err in result.errors:
            st.write(f"- {err}")
        st.stop()

    edited = plan["edited"]
    config = plan["config"]

    if result.warnings:
        with st.expander(f"Generation warnings ({len(result.warnings)})", expanded=True):
            for w in result.warnings:
                st.warning(w.message)

    st.subheader("Move a guest")
    guest_options = {f"{g.full_name} (table {t.number})": g.id for t in edited.tables for g in t.guests}
    table_options = {f"{t.number}. {t.name}": t.number for t in edited.tables}
    col_guest, col_table, col_move = st.columns([3, 2, 1])
    chosen_guest = col_guest.selectbox("Guest", list(guest_options))
    chosen_table = col_table.selectbox("Target table", list(table_options))
    if col_move.button("Move") and chosen_guest:
        try:
            plan["edited"] = move_guest(edited, guest_options[chosen_guest], table_options[chosen_table])
            st.rerun()
        except ValueError as e:
            st.error(str(e))

    advisories = check_plan(edited, plan["couples"], plan["exclusions"], by_family=config.sorting_criteria.by_family)
    for a in advisories:
        st.info(a.message)

    st.subheader("Tables")
    columns = st.columns(3)
    for i, table in enumerate(edited.tables):
        with columns[i % 3]:
            st.markdown(f"**{table.name}** ({len(table.guests)}/{table.capacity})")
            st.write("\n".join(f"- {g.full_name}" for g in table.guests) or "_empty_")

    df = plan_dataframe(edited.tables)
    st.subheader("Seating plan")
    st.dataframe(df, use_container_width=True)

    st.download_button("Download seating plan as CSV", csv_bytes(edited.tables), file_name="seating-plan.csv")
    st.download_button(
        "Download seating chart as PDF",
        render_pdf(edited.tables),
        file_name="seating-plan.pdf",
        mime="application/pdf",
    )

    st.subheader("Seating Mind Map")
    html = generate_seating_mind_map(edited.tables, plan["couples"], plan["exclusions"], shape=config.table_shape)
    components.html(html, height=720, scrolling=True)

    with st.expander("Placement trace"):
        st.code(format_trace(result.debug_trace))
