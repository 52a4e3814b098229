"""
Streamlit frontend for Course Reverse Search.

Calls POST http://localhost:3000/search (override with API_URL) and lists
the degrees and certificates that require the entered course.
"""

import streamlit as st

from frontend.client import API_URL, format_result, search

INTRO = """
Find the degrees and certificates that require a course.

### Quick start
1. Start the backend API in another terminal: `python app/app.py`
2. Enter a course code below (example: *CNIT 120*)
3. Click **Search**

### Notes
- Codes are a 2-4 letter department, a space, and a 1-4 digit number,
  optionally followed by one letter (*MATH 80A*).
- If the API is not running, you'll see a network error.
"""


def main() -> None:
    st.set_page_config(page_title="Course Reverse Search", layout="centered")
    st.title("Course Reverse Search")
    st.markdown(INTRO)

    course_code = st.text_input("Course code", placeholder="e.g. CNIT 120")
    if not st.button("Search"):
        return

    with st.spinner("Searching…"):
        outcome = search(course_code, api_url=API_URL)

    if not outcome.ok:
        st.error(outcome.message)
        return

    st.subheader("Required by")
    # Names come from the database; st.text shows them without markdown.
    for row in outcome.results:
        st.text(f"• {format_result(row)}")
