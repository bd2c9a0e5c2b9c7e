"""Leave Portal package.

The leave calendar is organized as a feature module (leave_calendar) with a
pure layout core (grid, placement), a thin Flask controller layer and
service/repository layers around it.
"""
