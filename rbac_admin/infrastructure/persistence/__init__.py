"""SQLAlchemy persistence: models, repositories and the Database wrapper."""
