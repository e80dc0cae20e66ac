"""Korean user-facing strings."""

from typing import Dict

# Notices shown to the user (the browser build used alert boxes)
MESSAGES: Dict[str, str] = {
    "load_error": "데이터 로드 중 오류가 발생했습니다.",
    "search_error": "검색 중 오류가 발생했습니다.",
    "no_criteria": "검색 조건을 입력해주세요.",
    "no_image": "이미지 URL이 없습니다.",
    "no_selection": "선택된 빌딩이 없습니다.",
    "no_coordinates": "좌표 정보가 있는 빌딩이 없습니다.",
    "no_results": "검색 결과가 없습니다.",
    "record_not_found": "해당 매물을 찾을 수 없습니다.",
}

# Loading overlay text
LOADING: Dict[str, str] = {
    "default": "로딩 중...",
    "initializing": "데이터를 초기화하는 중...",
    "searching": "검색 중...",
    "loading_all": "전체 데이터 로드 중...",
}

# Labels for headers and viewer captions
LABELS: Dict[str, str] = {
    "latest": "최신 자료",
    "no_data": "정보 없음",
    "source": "출처",
    "published": "발행",
    "page": "페이지",
    "companies": "회사",
    "no_other_sources": "타사 자료 없음",
    "first": "처음",
    "last": "마지막",
    "selected_buildings": "선택된 빌딩",
    "floor": "층",
    "exclusive_area": "전용",
}

# Result table / export column headers
TABLE_HEADERS: Dict[str, str] = {
    "building_name": "빌딩명",
    "address": "주소",
    "nearby_station": "인근역",
    "floor": "층",
    "exclusive_area": "전용(평)",
    "rent_area": "임대(평)",
    "deposit_py": "보증금/평",
    "rent_py": "임대료/평",
    "maintenance_py": "관리비/평",
    "source": "출처",
    "publish_date": "발행",
}
