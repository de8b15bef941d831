from linewait.models.requests import EstimateRequest, RawRowsRequest, VenueEstimates

__all__ = ["EstimateRequest", "RawRowsRequest", "VenueEstimates"]
