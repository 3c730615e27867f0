# Error kinds raised by the preparation and training stages.
# Every error carries the stage it came from plus whatever column/fold/model
# identifies the problem.


class PipelineError(Exception):

    def __init__(self, message, stage=None, **context):
        self.stage = stage
        self.context = context
        details = ", ".join(f"{k}={v!r}" for k, v in context.items() if v is not None)
        prefix = f"[{stage}] " if stage else ""
        suffix = f" ({details})" if details else ""
        super().__init__(f"{prefix}{message}{suffix}")


class SchemaError(PipelineError):
    pass


class MissingDataError(PipelineError):

    def __init__(self, counts, stage="type_normalizer"):
        self.counts = dict(counts)
        total = sum(self.counts.values())
        super().__init__(f"{total} missing values detected", stage=stage, columns=self.counts)


class DegenerateFeatureError(PipelineError):

    def __init__(self, column, value, stage="scaler"):
        self.column = column
        super().__init__(f"column has a single value ({value}), min-max scaling is undefined",
                         stage=stage, column=column)


class SplitError(PipelineError):
    pass


class FoldCompositionError(PipelineError):

    def __init__(self, fold, classes, part="training", message=None):
        self.fold = fold
        message = message or f"{part} part of the fold holds only classes {sorted(classes)}"
        super().__init__(message, stage="cross_validation", fold=fold)


class TrainingError(PipelineError):

    def __init__(self, model, cause, fold=None):
        self.model = model
        self.fold = fold
        self.cause = cause
        super().__init__(str(cause), stage="training", model=model, fold=fold)


class UnseenCategoryWarning(UserWarning):
    pass


class InsufficientComponentsWarning(UserWarning):
    pass
