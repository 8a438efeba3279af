#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
End-to-end tests for the discovery, filter and copy pipeline.
"""

import logging
import os
import shutil
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from image_finder.config import NAMES_FILE_NAME
from image_finder.models.preference import ImagePreference, OutputFormat
from image_finder.models.results import ItemState
from image_finder.processing.pipeline import ImagePipeline, run_pipeline


@pytest.fixture
def scenario(tmp_path, make_image, make_file):
    """/a/img1.jpg (800x600), /a/sub/img2.png (100x100), /a/sub/notes.txt"""
    root = tmp_path / "a"
    make_image(root / "img1.jpg", (800, 600))
    make_image(root / "sub" / "img2.png", (100, 100))
    make_file(root / "sub" / "notes.txt", b"just text")
    return root


def dest_names(dest):
    return sorted(p.name for p in dest.iterdir())


undecodable_names = pytest.mark.skipif(
    os.name != "posix" or sys.getfilesystemencoding().lower() != "utf-8",
    reason="needs a POSIX filesystem that allows non-UTF-8 file names",
)


class TestScenarios:

    def test_minimum_size_scenario(self, scenario, make_config):
        config = make_config([scenario], min_width=200, min_height=200)
        pipeline = ImagePipeline(config)

        stats = pipeline.run()

        assert stats.discovered == 2
        assert dest_names(config.destination) == ["img1.jpg"]
        assert stats.paths_in(ItemState.COPIED) == [scenario / "img1.jpg"]
        assert stats.paths_in(ItemState.REJECTED) == [scenario / "sub" / "img2.png"]
        assert stats.end_time is not None

    def test_square_passes_wide(self, tmp_path, make_image, make_config):
        make_image(tmp_path / "in" / "square.png", (400, 400))
        config = make_config([tmp_path / "in"], preference=ImagePreference.WIDE)
        run_pipeline(config)
        assert dest_names(config.destination) == ["square.png"]

    def test_aspect_preferences(self, tmp_path, make_image, make_config):
        src = tmp_path / "in"
        make_image(src / "landscape.png", (300, 200))
        make_image(src / "portrait.png", (200, 300))
        make_image(src / "square.png", (250, 250))

        wide = make_config([src], preference=ImagePreference.WIDE, destination=tmp_path / "wide")
        tall = make_config([src], preference=ImagePreference.TALL, destination=tmp_path / "tall")
        run_pipeline(wide)
        run_pipeline(tall)

        assert dest_names(tmp_path / "wide") == ["landscape.png", "square.png"]
        assert dest_names(tmp_path / "tall") == ["portrait.png", "square.png"]

    def test_destination_is_created(self, scenario, tmp_path, make_config):
        destination = tmp_path / "deep" / "nested" / "out"
        stats = run_pipeline(make_config([scenario], destination=destination))
        assert destination.is_dir()
        assert stats.destination_ready

    def test_existing_destination_is_fine(self, scenario, tmp_path, make_config):
        destination = tmp_path / "out"
        destination.mkdir()
        stats = run_pipeline(make_config([scenario], destination=destination))
        assert stats.destination_ready
        assert dest_names(destination) == ["img1.jpg", "img2.png"]

    def test_running_twice_is_idempotent(self, scenario, make_config):
        config = make_config([scenario])
        run_pipeline(config)
        first = {p.name: p.read_bytes() for p in config.destination.iterdir()}
        run_pipeline(config)
        second = {p.name: p.read_bytes() for p in config.destination.iterdir()}
        assert first == second

    def test_no_images(self, tmp_path, make_config):
        (tmp_path / "empty").mkdir()
        stats = run_pipeline(make_config([tmp_path / "empty"]))
        assert stats.discovered == 0
        assert stats.outcomes == []


class TestFailureIsolation:

    def test_corrupt_image_does_not_stop_siblings(self, tmp_path, make_image, make_file,
                                                  make_config):
        src = tmp_path / "in"
        make_image(src / "good1.png", (50, 50))
        make_file(src / "bad.jpg")
        make_image(src / "other" / "good2.jpg", (50, 50))
        config = make_config([src])

        stats = run_pipeline(config)

        assert dest_names(config.destination) == ["good1.png", "good2.jpg"]
        assert stats.paths_in(ItemState.OPEN_FAILED) == [src / "bad.jpg"]

    def test_unreadable_directory_does_not_stop_siblings(self, tmp_path, make_image,
                                                         make_config, deny_listing):
        src = tmp_path / "in"
        make_image(src / "locked" / "hidden.png", (50, 50))
        make_image(src / "open" / "visible.png", (50, 50))
        make_image(src / "top.png", (50, 50))
        deny_listing.add(src / "locked")
        config = make_config([src])

        stats = run_pipeline(config)

        assert dest_names(config.destination) == ["top.png", "visible.png"]
        assert stats.failed_directories == 1

    def test_unexpected_task_error_is_isolated(self, tmp_path, make_image, make_config, caplog):
        src = tmp_path / "in"
        make_image(src / "ok.png", (50, 50))
        make_image(src / "explodes.png", (50, 50))
        config = make_config([src])
        pipeline = ImagePipeline(config)
        real_accepts = pipeline.image_filter.accepts

        def accepts(path):
            if path.name == "explodes.png":
                raise RuntimeError("decoder crashed")
            return real_accepts(path)

        with patch.object(pipeline.image_filter, "accepts", side_effect=accepts):
            with caplog.at_level(logging.ERROR):
                stats = pipeline.run()

        assert dest_names(config.destination) == ["ok.png"]
        assert stats.paths_in(ItemState.ERROR) == [src / "explodes.png"]
        assert "decoder crashed" in caplog.text

    def test_copy_failure_is_isolated(self, tmp_path, make_image, make_config):
        src = tmp_path / "in"
        make_image(src / "ok.png", (50, 50))
        make_image(src / "fails.png", (50, 50))
        config = make_config([src])
        real_copyfile = shutil.copyfile

        def flaky_copyfile(source, target):
            if Path(source).name == "fails.png":
                raise OSError(28, "No space left on device")
            return real_copyfile(source, target)

        with patch("image_finder.processing.copier.shutil.copyfile", side_effect=flaky_copyfile):
            stats = run_pipeline(config)

        assert dest_names(config.destination) == ["ok.png"]
        assert stats.paths_in(ItemState.COPY_FAILED) == [src / "fails.png"]

    def test_destination_creation_failure_is_not_fatal(self, scenario, tmp_path, make_config,
                                                        caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where the destination should be")
        config = make_config([scenario], destination=blocker)

        with caplog.at_level(logging.ERROR):
            stats = run_pipeline(config)

        assert not stats.destination_ready
        assert stats.discovered == 2
        assert len(stats.paths_in(ItemState.COPY_FAILED)) == 2
        assert "Error creating image copy destination" in caplog.text


class TestOutputOptions:

    def test_names_format_lists_instead_of_copying(self, scenario, make_config):
        config = make_config([scenario], min_width=200, min_height=200,
                             output_format=OutputFormat.NAMES)

        stats = run_pipeline(config)

        assert dest_names(config.destination) == [NAMES_FILE_NAME]
        lines = (config.destination / NAMES_FILE_NAME).read_text(encoding="utf-8").splitlines()
        assert lines == [str(scenario / "img1.jpg")]
        assert stats.counts()["listed"] == 1
        assert stats.counts()["copied"] == 0

    def test_namespace_policy_avoids_collisions(self, tmp_path, make_image, make_config):
        make_image(tmp_path / "in" / "x" / "photo.png", (30, 30), color=(255, 0, 0))
        make_image(tmp_path / "in" / "y" / "photo.png", (30, 30), color=(0, 0, 255))
        config = make_config([tmp_path / "in"], collision_policy="namespace")

        stats = run_pipeline(config)

        assert stats.counts()["copied"] == 2
        assert len(dest_names(config.destination)) == 2

    def test_summary_and_dict(self, scenario, make_config):
        stats = run_pipeline(make_config([scenario], min_width=200, min_height=200))
        data = stats.to_dict()
        assert data["discovered"] == 2
        assert data["counts"]["copied"] == 1
        assert data["counts"]["rejected"] == 1
        assert "Copied: 1" in stats.summary()

    def test_progress_bar_does_not_change_results(self, scenario, make_config):
        config = make_config([scenario])
        stats = ImagePipeline(config, show_progress=True).run()
        assert stats.counts()["copied"] == 2

    def test_rerun_skips_destination_inside_root(self, tmp_path, make_image, make_config):
        root = tmp_path / "pictures"
        make_image(root / "a.png", (30, 30))
        make_image(root / "sub" / "b.jpg", (30, 30))
        config = make_config([root], destination=root / "image_data")

        run_pipeline(config)
        stats = run_pipeline(config)

        assert stats.discovered == 2
        assert stats.paths_in(ItemState.COPY_FAILED) == []
        assert dest_names(config.destination) == ["a.png", "b.jpg"]

    def test_namespace_rerun_does_not_grow_destination(self, tmp_path, make_image, make_config):
        root = tmp_path / "pictures"
        make_image(root / "x" / "photo.png", (30, 30))
        config = make_config([root], destination=root / "image_data",
                             collision_policy="namespace")

        run_pipeline(config)
        first = dest_names(config.destination)
        run_pipeline(config)

        assert dest_names(config.destination) == first
        assert len(first) == 1


@undecodable_names
class TestUndecodableNames:
    """File names that are not valid UTF-8 are still processed like any other."""

    def test_names_file_keeps_original_bytes(self, tmp_path, make_image, make_config):
        src = tmp_path / "in"
        make_image(src / os.fsdecode(b"caf\xe9.png"), (40, 40))
        make_image(src / "plain.png", (40, 40))
        config = make_config([src], output_format=OutputFormat.NAMES)

        stats = run_pipeline(config)

        assert stats.counts()["listed"] == 2
        lines = (config.destination / NAMES_FILE_NAME).read_bytes().splitlines()
        assert os.fsencode(src / os.fsdecode(b"caf\xe9.png")) in lines
        assert os.fsencode(src / "plain.png") in lines

    def test_namespace_policy_copies_from_undecodable_directory(self, tmp_path, make_image,
                                                                make_config):
        src = tmp_path / "in"
        make_image(src / os.fsdecode(b"caf\xe9") / "photo.png", (40, 40))
        config = make_config([src], collision_policy="namespace")

        stats = run_pipeline(config)

        assert stats.counts()["copied"] == 1
        assert dest_names(config.destination)[0].startswith("photo_")
