"""
Unit tests for operation steps, Pipeline and PipelineConfig.

Covers: step naming and metadata, chaining order, intermediate tracking,
artifact saving, and configuration validation.
"""

import pytest

from imageops import (
    EdgeDetectStep,
    FlipHorizontalStep,
    FlipVerticalStep,
    Image,
    IntensityStep,
    Pipeline,
    PipelineConfig,
    Rotate180Step,
    SepiaStep,
    build_pipeline,
    edge_detect,
    flip_horizontal,
    read_image,
    rotate_180,
    run_pipeline,
    sepia,
)


class TestSteps:
    """Tests for the individual step classes."""

    def test_step_names(self):
        assert SepiaStep().name == "sepia"
        assert IntensityStep(intensity=2.0, channel="r").name == "intensity(2.0,r)"
        assert FlipHorizontalStep().name == "flip"
        assert FlipVerticalStep().name == "flip-vertical"
        assert Rotate180Step().name == "rotate180"
        assert EdgeDetectStep(threshold=50).name == "edges(50)"

    def test_steps_delegate_to_operations(self, random_image):
        assert SepiaStep().apply(random_image) == sepia(random_image)
        assert FlipHorizontalStep().apply(random_image) == flip_horizontal(random_image)
        assert Rotate180Step().apply(random_image) == rotate_180(random_image)
        assert EdgeDetectStep(threshold=40).apply(random_image) == edge_detect(random_image, 40)

    def test_intensity_metadata_reports_identity(self, random_image):
        step = IntensityStep(intensity=2.0, channel="x")
        result = step.apply(random_image)
        assert result == random_image
        assert step.get_metadata() == {"step_status": "identity"}

    def test_intensity_metadata_reports_applied(self, random_image):
        step = IntensityStep(intensity=2.0, channel="g")
        _ = step.apply(random_image)
        assert step.get_metadata() == {"step_status": "applied"}

    def test_edge_step_metadata(self, random_image):
        step = EdgeDetectStep(threshold=50)
        _ = step.apply(random_image)
        metadata = step.get_metadata()
        assert metadata["input_size"] == (7, 5)
        assert metadata["output_size"] == (6, 4)

    def test_edge_step_rejects_float_threshold(self):
        with pytest.raises(TypeError, match="threshold must be int"):
            EdgeDetectStep(threshold=50.5)


class TestPipeline:
    """Tests for the Pipeline class."""

    def test_empty_pipeline_returns_original(self, random_image):
        result = Pipeline(steps=[]).run(random_image)
        assert result.final == random_image
        assert result.steps == []

    def test_applies_steps_in_order(self, random_image):
        pipeline = Pipeline(steps=[SepiaStep(), FlipHorizontalStep()])
        result = pipeline.run(random_image)
        assert result.final == flip_horizontal(sepia(random_image))

    def test_tracks_intermediates(self, random_image):
        pipeline = Pipeline(steps=[SepiaStep(), EdgeDetectStep(threshold=30)])
        result = pipeline.run(random_image)
        assert len(result.steps) == 2
        assert result.steps[0].name == "sepia"
        assert result.steps[0].image.shape == (7, 5)
        assert result.steps[1].name == "edges(30)"
        assert result.steps[1].image.shape == (6, 4)

    def test_get_intermediate_by_name(self, random_image):
        result = Pipeline(steps=[SepiaStep(), FlipHorizontalStep()]).run(random_image)
        assert result.get_intermediate("sepia") == sepia(random_image)
        assert result.get_intermediate("unknown") is None

    def test_aggregates_metadata(self, random_image):
        pipeline = Pipeline(steps=[
            IntensityStep(intensity=0.5, channel="b"),
            EdgeDetectStep(threshold=30),
        ])
        result = pipeline.run(random_image)
        assert result.get_metadata("output_size") == (6, 4)
        assert result.all_metadata["step_status"] == "applied"
        assert result.get_metadata("missing") is None

    def test_preserves_original(self, random_image):
        before = random_image.pixels.copy()
        result = Pipeline(steps=[SepiaStep()]).run(random_image)
        assert result.original is random_image
        assert (random_image.pixels == before).all()

    def test_saves_artifacts(self, tmp_path, random_image):
        pipeline = Pipeline(steps=[SepiaStep(), EdgeDetectStep(threshold=30)])
        result = pipeline.run(random_image, artifact_dir=str(tmp_path))
        paths = result.artifact_paths
        assert set(paths) == {"original", "01_sepia", "02_edges"}
        assert read_image(paths["original"]) == random_image
        assert read_image(paths["02_edges"]) == result.final

    def test_repeated_step_keeps_every_artifact(self, tmp_path, random_image):
        pipeline = Pipeline(steps=[
            IntensityStep(intensity=2.0, channel="r"),
            IntensityStep(intensity=2.0, channel="r"),
        ])
        result = pipeline.run(random_image, artifact_dir=str(tmp_path))
        first, second = result.steps
        assert first.artifact_path != second.artifact_path
        assert set(result.artifact_paths) == {"original", "01_intensity", "02_intensity"}
        assert read_image(first.artifact_path) == first.image
        assert read_image(second.artifact_path) == second.image
        assert first.image != second.image

    def test_len_and_iter(self):
        steps = [SepiaStep(), Rotate180Step()]
        pipeline = Pipeline(steps=steps)
        assert len(pipeline) == 2
        assert list(pipeline) == steps


class TestPipelineConfig:
    """Tests for PipelineConfig validation."""

    def test_defaults_are_valid(self):
        PipelineConfig().validate()

    def test_unknown_operation_raises(self):
        with pytest.raises(ValueError, match="Unknown operation"):
            PipelineConfig(operations=("sepia", "blur")).validate()

    def test_negative_intensity_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            PipelineConfig(intensity=-0.5).validate()

    def test_nan_intensity_raises(self):
        with pytest.raises(ValueError, match="finite"):
            PipelineConfig(intensity=float("nan")).validate()

    def test_multi_character_channel_raises(self):
        with pytest.raises(ValueError, match="single character"):
            PipelineConfig(channel="red").validate()

    def test_unknown_single_character_channel_is_valid(self):
        PipelineConfig(channel="x").validate()

    def test_float_threshold_raises(self):
        with pytest.raises(ValueError, match="integer"):
            PipelineConfig(threshold=12.5).validate()

    def test_out_of_range_threshold_is_valid(self):
        PipelineConfig(threshold=300).validate()


class TestRunPipeline:
    """Tests for build_pipeline and run_pipeline."""

    def test_build_pipeline_maps_names(self):
        config = PipelineConfig(
            operations=("sepia", "intensity", "flip", "flip-vertical", "rotate180", "edges"),
            intensity=1.5,
            channel="g",
            threshold=42,
        )
        pipeline = build_pipeline(config)
        assert [step.name for step in pipeline] == [
            "sepia",
            "intensity(1.5,g)",
            "flip",
            "flip-vertical",
            "rotate180",
            "edges(42)",
        ]

    def test_default_config_is_identity(self, random_image):
        result = run_pipeline(random_image)
        assert result.final == random_image

    def test_sepia_then_flip(self, random_image):
        config = PipelineConfig(operations=("sepia", "flip"))
        result = run_pipeline(random_image, config)
        assert result.final == flip_horizontal(sepia(random_image))

    def test_repeated_operation(self, random_image):
        config = PipelineConfig(operations=("rotate180", "rotate180"))
        assert run_pipeline(random_image, config).final == random_image

    def test_invalid_config_raises(self, random_image):
        with pytest.raises(ValueError):
            run_pipeline(random_image, PipelineConfig(operations=("nope",)))

    def test_invalid_input_raises(self):
        with pytest.raises(TypeError, match="Expected Image"):
            run_pipeline("not an image")

    def test_checkerboard_edges(self, checker_2x2):
        config = PipelineConfig(operations=("edges",), threshold=100)
        result = run_pipeline(checker_2x2, config)
        assert result.final == Image.from_rows([[(0, 0, 0)]])
