"""Sunday School console.

Feature packages (users, classes, children, events, teams, scores, qr,
dashboard) each carry a model, a repository protocol with its MySQL
implementation, a service and a thin Flask controller.
"""
