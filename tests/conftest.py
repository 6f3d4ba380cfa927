"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from ros_msgdigest import MsgRegistry

# Digests as published by ROS1 (genmsg) for the definitions below
STRING_MD5 = "992ce8a1687cec8c8bd883ec73ca41d1"
INT32_MD5 = "da5909fbe378aeaf85e547e830cc1bb7"
HEADER_MD5 = "2176decaecbce78abc3b96ef049fabed"
POINT_MD5 = "4a842b65f413084dc2b10fb484ea7f17"
QUATERNION_MD5 = "a779879fadf0160734f906b8c19c7004"
POSE_MD5 = "e45d45a5a1ce597b249e23fb30fc871f"
POSE_STAMPED_MD5 = "d3812c3cbc69362b77dc0b19b345f8f5"
POSE_WITH_COVARIANCE_MD5 = "c23e848cf1b7533a8d7c259073a97e6f"
EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
TRIGGER_MD5 = "937c9679a518e3a18d831e57125ea522"
SET_BOOL_MD5 = "09fb03525b03e7ea1fd3992bafd87e16"
ADD_TWO_INTS_MD5 = "6a2e34150c00229791cc89ff309fff21"

PACKAGES: dict[str, dict[str, str]] = {
    "std_msgs": {
        "msg/String.msg": "string data\n",
        "msg/Int32.msg": "int32 data\n",
        "msg/Header.msg": (
            "# Standard metadata for higher-level stamped data types.\n"
            "# sequence ID: consecutively increasing ID\n"
            "uint32 seq\n"
            "#Two-integer timestamp that is expressed as:\n"
            "# * stamp.sec: seconds (stamp_secs) since epoch\n"
            "time stamp\n"
            "#Frame this data is associated with\n"
            "string frame_id\n"
        ),
        "msg/Empty.msg": "",
    },
    "geometry_msgs": {
        "msg/Point.msg": "# This contains the position of a point in free space\n"
        "float64 x\nfloat64 y\nfloat64 z\n",
        "msg/Quaternion.msg": "# This represents an orientation in free space "
        "in quaternion form.\n\n"
        "float64 x\nfloat64 y\nfloat64 z\nfloat64 w\n",
        "msg/Pose.msg": "# A representation of pose in free space\n"
        "Point position\nQuaternion orientation\n",
        "msg/PoseStamped.msg": "# A Pose with reference coordinate frame and timestamp\n"
        "Header header\nPose pose\n",
        "msg/PoseWithCovariance.msg": "Pose pose\n\n"
        "# Row-major representation of the 6x6 covariance matrix\n"
        "float64[36] covariance\n",
    },
    "std_srvs": {
        "srv/Empty.srv": "---\n",
        "srv/Trigger.srv": "---\nbool success   # indicate successful run of triggered service\n"
        "string message # informational, e.g. for error messages\n",
        "srv/SetBool.srv": "bool data # e.g. for hardware enabling / disabling\n---\n"
        "bool success   # indicate successful run of triggered service\n"
        "string message # informational, e.g. for error messages\n",
    },
    "rospy_tutorials": {
        "srv/AddTwoInts.srv": "int64 a\nint64 b\n---\nint64 sum\n",
        "srv/Broken.srv": "int64 a\nint64 b\n",
    },
    "cyclic_msgs": {
        "msg/Node.msg": "Node next\n",
        "msg/Left.msg": "Right right\n",
        "msg/Right.msg": "Left left\n",
    },
}


def write_package(root: Path, name: str, files: dict[str, str], *, manifest: bool = True) -> Path:
    """Create a package directory with the given definition files."""
    pkg = root / name
    pkg.mkdir(parents=True, exist_ok=True)
    if manifest:
        (pkg / "package.xml").write_text(f"<package><name>{name}</name></package>\n")
    for rel, text in files.items():
        path = pkg / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return pkg


@pytest.fixture
def package_root(tmp_path) -> Path:
    """Package root holding std_msgs, geometry_msgs, std_srvs and friends."""
    root = tmp_path / "share"
    for name, files in PACKAGES.items():
        write_package(root, name, files)
    # Has definitions but no manifest, must not be indexed
    write_package(root, "not_a_package", {"msg/Ghost.msg": "int32 boo\n"}, manifest=False)
    return root


@pytest.fixture
def registry(package_root) -> MsgRegistry:
    return MsgRegistry([package_root])
