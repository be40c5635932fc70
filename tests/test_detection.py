import numpy as np

from radartrack.detection import ClsConf, Detection, MatchResult


def test_to_tlbr_size_recovered():
    det = Detection([10, 20, 4, 8])
    tlbr = det.to_tlbr()
    np.testing.assert_allclose(tlbr[2:] - tlbr[:2], det.tlwh[2:])
    np.testing.assert_allclose(tlbr[:2], det.tlwh[:2])


def test_to_xyah_round_trip():
    det = Detection([10, 20, 4, 8])
    cx, cy, a, h = det.to_xyah()
    w = a * h
    np.testing.assert_allclose([cx - w / 2, cy - h / 2, w, h], det.tlwh)


def test_to_xyah_does_not_mutate():
    det = Detection([1, 2, 3, 4])
    det.to_xyah()
    det.to_tlbr()
    np.testing.assert_allclose(det.tlwh, [1, 2, 3, 4])


def test_default_feature_shape():
    det = Detection([0, 0, 1, 1])
    assert det.feature.shape == (256,)
    assert not det.feature.any()


def test_cls_conf_defaults():
    assert ClsConf() == ClsConf(-1, -1.0)


def test_match_result_independent_lists():
    a = MatchResult()
    a.matches.append((0, 1))
    assert MatchResult().matches == []