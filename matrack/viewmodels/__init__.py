"""ViewModel package: one state container per page.

Call context:
    ``matrack.web_ui.main`` constructs a fresh viewmodel for every page
    render and binds widgets to its state and coroutines.

Dependencies:
    Domain types and use cases only. Transport stays behind the use cases.
"""
