"""SmartTrack package.

Feature modules (attendance, offices, users, reports) with a thin Flask
controller layer on top of service and repository layers.
"""
