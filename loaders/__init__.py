from .report_loader import MarketplaceReportLoader, header_universe, parse_csv_text

__all__ = ["MarketplaceReportLoader", "header_universe", "parse_csv_text"]
