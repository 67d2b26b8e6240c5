import streamlit as st
import pandas as pd

from appointment_widget.client.api_client import BookingApiClient, BookingApiError

# Page Config
st.set_page_config(
    page_title="Bookings Admin",
    page_icon="📅",
    layout="centered"
)

# Header
st.title("Bookings - Admin Panel")

api = BookingApiClient()

def load_data():
    try:
        return pd.DataFrame(api.list_bookings())
    except BookingApiError as e:
        st.error(f"Could not load bookings: {e.message}")
        return None

# Load Data
if st.button("Refresh"):
    st.rerun()

df = load_data()

if df is not None and not df.empty:
    # Metrics
    col1, col2, col3 = st.columns(3)
    col1.metric("Total bookings", len(df))
    col2.metric("Services", df['service'].nunique())
    col3.metric("Days booked", df['date'].nunique())

    # Data Table
    st.subheader("Bookings")
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_order=["id", "date", "time", "fullName", "contactNumber", "email", "service"],
        column_config={
            "id": "ID",
            "date": "Date",
            "time": "Time",
            "fullName": "Full name",
            "contactNumber": "Contact number",
            "email": "Email",
            "service": "Service",
        }
    )

    # Delete
    st.subheader("Delete booking")
    booking_id = st.selectbox("Booking ID", df['id'].tolist())
    if st.button("Delete", type="primary"):
        try:
            api.delete_booking(int(booking_id))
            st.rerun()
        except BookingApiError as e:
            st.error(e.message)
else:
    st.info("No bookings yet.")

# Footer
st.markdown("---")
st.caption("Appointment Booking Widget • Admin")
