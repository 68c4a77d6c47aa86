"""
Streamlit demo app smoke tests.
"""

from streamlit.testing.v1 import AppTest


class TestApp:

    def test_debug_pipeline_renders(self):
        at = AppTest.from_file("../main.py", default_timeout=60).run()
        assert not at.exception
        at.button[0].click().run()
        assert not at.exception
        assert not at.error
        assert [h.value for h in at.header][-1] == "Keywords"
