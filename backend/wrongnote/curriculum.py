"""Elementary math chapter list, keyed by (grade, term)."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

GRADES = range(1, 7)
TERMS = (1, 2)

CURRICULUM: Dict[Tuple[int, int], List[str]] = {
    (1, 1): ["9까지의 수", "여러 가지 모양", "덧셈과 뺄셈", "비교하기", "50까지의 수"],
    (1, 2): ["100까지의 수", "덧셈과 뺄셈(1)", "모양과 시각", "덧셈과 뺄셈(2)", "규칙 찾기", "덧셈과 뺄셈(3)"],
    (2, 1): ["세 자리 수", "여러 가지 도형", "덧셈과 뺄셈", "길이 재기", "분류하기", "곱셈"],
    (2, 2): ["네 자리 수", "곱셈구구", "길이 재기", "시각과 시간", "표와 그래프", "규칙 찾기"],
    (3, 1): ["덧셈과 뺄셈", "평면도형", "나눗셈", "곱셈", "길이와 시간", "분수와 소수"],
    (3, 2): ["곱셈", "나눗셈", "원", "분수", "들이와 무게", "자료의 정리"],
    (4, 1): ["큰 수", "각도", "곱셈과 나눗셈", "평면도형의 이동", "막대그래프", "규칙 찾기"],
    (4, 2): ["분수의 덧셈과 뺄셈", "삼각형", "소수의 덧셈과 뺄셈", "사각형", "꺾은선그래프", "다각형"],
    (5, 1): ["자연수의 혼합 계산", "약수와 배수", "규칙과 대응", "약분과 통분", "분수의 덧셈과 뺄셈", "다각형의 둘레와 넓이"],
    (5, 2): ["수의 범위와 어림하기", "분수의 곱셈", "합동과 대칭", "소수의 곱셈", "직육면체", "평균과 가능성"],
    (6, 1): ["분수의 나눗셈", "각기둥과 각뿔", "소수의 나눗셈", "비와 비율", "여러 가지 그래프", "직육면체의 부피와 겉넓이"],
    (6, 2): ["분수의 나눗셈", "소수의 나눗셈", "공간과 입체", "비례식과 비례배분", "원의 넓이", "원기둥, 원뿔, 구"],
}


def chapters_for(grade: Optional[int] = None, term: Optional[int] = None) -> List[str]:
    """Chapters for a grade and term; both terms when only the grade is given."""
    if grade is None:
        return []
    if grade not in GRADES:
        raise ValueError(f"grade must be between 1 and 6, got {grade}")
    if term is not None:
        if term not in TERMS:
            raise ValueError(f"term must be 1 or 2, got {term}")
        return list(CURRICULUM[(grade, term)])
    return [chapter for t in TERMS for chapter in CURRICULUM[(grade, t)]]
