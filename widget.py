import streamlit as st

from appointment_widget.client.api_client import BookingApiClient
from appointment_widget.client.form import BookingForm
from appointment_widget.core.catalog import SERVICES
from appointment_widget.core.logger import setup_logging

FIELDS = ["fullName", "contactNumber", "email", "service", "date", "time"]

# Page Config
st.set_page_config(
    page_title="Book an Appointment",
    page_icon="📅",
    layout="centered"
)

if "booking_form" not in st.session_state:
    setup_logging()
    st.session_state.booking_form = BookingForm(BookingApiClient())

form: BookingForm = st.session_state.booking_form


def on_change(field: str):
    form.set_field(field, st.session_state[f"w_{field}"])
    if field == "date":
        # Date change may have dropped the selected time
        st.session_state["w_time"] = form.data.time


def on_submit():
    if form.submit():
        for field in FIELDS:
            st.session_state[f"w_{field}"] = None if field == "date" else ""


def field_error(field: str):
    if field in form.errors:
        st.caption(f":red[{form.errors[field]}]")


# Notification
notification = form.notifications.current
if notification:
    show = st.success if notification.type == "success" else st.error
    col_msg, col_close = st.columns([10, 1])
    with col_msg:
        show(notification.message)
    with col_close:
        st.button("×", on_click=form.notifications.dismiss)

st.title("Book an Appointment")

st.text_input("Full Name *", key="w_fullName", placeholder="Enter your full name",
              on_change=on_change, args=("fullName",))
field_error("fullName")

st.text_input("Contact Number *", key="w_contactNumber", placeholder="Enter your contact number",
              on_change=on_change, args=("contactNumber",))
field_error("contactNumber")

st.text_input("Email Address *", key="w_email", placeholder="Enter your email address",
              on_change=on_change, args=("email",))
field_error("email")

st.selectbox("Service *", [""] + SERVICES, key="w_service",
             format_func=lambda s: s or "Select a service",
             on_change=on_change, args=("service",))
field_error("service")

st.date_input("Appointment Date *", value=None, key="w_date", min_value=form.today(),
              format="DD/MM/YYYY", on_change=on_change, args=("date",))
field_error("date")

st.selectbox("Appointment Time *", [""] + form.available_slots, key="w_time",
             format_func=lambda s: s or "Select a time",
             disabled=form.data.date is None,
             on_change=on_change, args=("time",))
field_error("time")
if form.no_slots_left:
    st.info("No available slots for this date")

st.button(
    "Booking..." if form.is_submitting else "Book Appointment",
    type="primary",
    disabled=not form.can_submit,
    on_click=on_submit,
)
