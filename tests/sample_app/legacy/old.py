from wirebox import service


@service
class LegacyReportService:
    pass
