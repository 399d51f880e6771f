from pathlib import Path

from pedbuild.main import main


def test_end_to_end(tmp_path: Path, capsys):
    # небольшая родословная: C2 не знает мать, FA и MO – основатели
    ped = tmp_path / "pedigree.csv"
    ped.write_text(
        "id,father_id,mother_id,sex\n"
        "FA,,,1\n"
        "MO,,,2\n"
        "C1,FA,MO,1\n"
        "C2,FA,,2\n"
    )

    # 2 отца × 3 матери → B(2)·B(3) = 10 вариантов
    res = main(["--pedigree", str(ped)])
    assert len(res) == 10
    assert all(p.is_complete() for p in res)
    assert "10 candidate pedigrees" in capsys.readouterr().out

    # быстрый путь – одна родословная, мать C2 добавлена
    fast = main(["--pedigree", str(ped), "--fast"])
    assert len(fast) == 1
    assert fast[0].n == 5
    assert fast[0] in res

    # общая мать у FA и его дочери C2 запрещена
    strict = main(["--pedigree", str(ped), "--max_linear_inb", "0", "--sex_symmetry"])
    assert 0 < len(strict) < len(res)
