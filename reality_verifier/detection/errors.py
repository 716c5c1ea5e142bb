"""
Domain errors raised by the detection pipeline.

  - DetectionFailure:   one method could not evaluate the media. Recovered by
                        DetectionRunner into a zero-score marker output.
  - InvalidScoreRange:  a method reported score/confidence outside [0, 1].
                        DetectionRunner clamps and logs it.
  - EmptyMethodSet:     aggregation attempted with no method outputs. Fatal for
                        that item only.
  - AnalysisCancelled:  the run's cancellation token was set mid-analysis.
"""


class AnalysisError(Exception):
    """Base class for every analysis-pipeline error."""


class DetectionFailure(AnalysisError):
    def __init__(self, method_name: str, reason: str):
        self.method_name = method_name
        self.reason = reason
        super().__init__(f"{method_name} failed: {reason}")


class InvalidScoreRange(AnalysisError):
    def __init__(self, method_name: str, field: str, value: float):
        self.method_name = method_name
        self.field = field
        self.value = value
        super().__init__(f"{method_name} reported {field}={value!r} outside [0, 1]")


class EmptyMethodSet(AnalysisError):
    def __init__(self, media_id: str):
        self.media_id = media_id
        super().__init__(f"No detection method outputs for media {media_id}")


class AnalysisCancelled(AnalysisError):
    def __init__(self, media_id: str):
        self.media_id = media_id
        super().__init__(f"Analysis cancelled for media {media_id}")
