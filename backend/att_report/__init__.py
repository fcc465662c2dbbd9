"""Report-data engine and service for the ATT time tracker."""
