"""이 파일은 .py 버전 문자열 변환 모듈로 서버 버전을 비교 가능한 숫자로 바꿉니다."""

from typing import Optional


def parse_version(raw: Optional[str]) -> float:
    """버전 문자열을 float로 변환한다. 예: ``"3.6.7"`` -> ``3.67``.

    숫자는 모두 유지하고 첫 번째 '.'만 남기며 나머지 문자는 버린다.
    세 번째 이후 세그먼트는 소수부에 이어 붙으므로 ``"4.10"`` 은 ``4.1`` 이 된다.
    결과가 비면 0을 반환하며 어떤 입력에도 예외를 던지지 않는다.
    """
    kept = []
    seen_point = False
    for char in raw or "":
        if "0" <= char <= "9":
            kept.append(char)
        elif char == "." and not seen_point:
            kept.append(char)
            seen_point = True
    text = "".join(kept)
    # "." 하나만 남은 경우도 숫자가 없는 것으로 본다.
    if not text.strip("."):
        return 0.0
    return float(text)
