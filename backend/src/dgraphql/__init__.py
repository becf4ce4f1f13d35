"""GraphQL over AWS Lambda and API Gateway."""

__version__ = "0.1.0"
