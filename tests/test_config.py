"""Tests for package path configuration."""

import os
from pathlib import Path

from ros_msgdigest.config import ROS_PACKAGE_PATH_ENV, package_paths_from_env, split_package_path


def test_split_package_path():
    value = os.pathsep.join(["/opt/ros/noetic/share", "", "/home/user/catkin_ws/src"])
    assert split_package_path(value) == (
        Path("/opt/ros/noetic/share"),
        Path("/home/user/catkin_ws/src"),
    )


def test_from_explicit_environ():
    environ = {ROS_PACKAGE_PATH_ENV: os.pathsep.join(["/a", "/b"])}
    assert package_paths_from_env(environ) == (Path("/a"), Path("/b"))


def test_unset_variable():
    assert package_paths_from_env({}) == ()


def test_from_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(ROS_PACKAGE_PATH_ENV, str(tmp_path))
    assert package_paths_from_env() == (tmp_path,)
