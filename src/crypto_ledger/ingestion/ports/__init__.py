from crypto_ledger.ingestion.ports.http import HttpResponse, IHttpClient

__all__ = ["HttpResponse", "IHttpClient"]
