"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from qbi_header_compiler.infrastructure.logging import LoggerSetup

QUTIL_HEADER = """\
using namespace QPI;

constexpr uint64 QUTIL_MAX_RECIPIENTS = 25;
constexpr uint64 QUTIL_POLL_SLOTS = 2 * 32;
#define QUTIL_NAME_LENGTH 32

struct QUTIL2
{
};

struct QUTIL : public ContractBase
{
    struct SendToManyV1_input
    {
        id dst0, dst1;
        sint64 amt0;
        sint64 amt1;
    };
    struct SendToManyV1_output
    {
        sint32 returnCode;
    };

    struct GetSendToManyV1Fee_input
    {
    };
    struct GetSendToManyV1Fee_output
    {
        sint64 fee; // Number of billionths
    };

    struct BurnQubic_input
    {
        sint64 amount;
    };
    struct BurnQubic_output
    {
        sint64 amount;
    };

    /* Poll bookkeeping { not a body } */
    struct PollInfo
    {
        id creator;
        uint8 name[QUTIL_NAME_LENGTH];
        Array<uint64, 4> allowedAssets;
        bit_64 flags;
    };

    struct GetPollInfo_input
    {
        uint64 poll_id;
    };
    struct GetPollInfo_output
    {
        uint64 found;
        PollInfo poll_info;
    };

    PUBLIC_FUNCTION(GetSendToManyV1Fee)
    {
        output.fee = 10;
    }

    REGISTER_USER_FUNCTIONS_AND_PROCEDURES()
    {
        REGISTER_USER_FUNCTION(GetSendToManyV1Fee, 1);
        REGISTER_USER_FUNCTION(GetPollInfo, 2);

        REGISTER_USER_PROCEDURE(SendToManyV1, 1);
        REGISTER_USER_PROCEDURE(BurnQubic, 2);
    }
};
"""

QPI_PRELUDE = """\
#pragma once

#define NUMBER_OF_COMPUTORS 676

namespace QPI
{
    typedef unsigned long long uint64;
    typedef signed long long sint64;

    constexpr unsigned long long MAX_AMOUNT = 1000000ULL * 1000000ULL * 1000ULL;

    struct Entity
    {
        id publicKey;
        sint64 incomingAmount, outgoingAmount;
        uint32 numberOfIncomingTransfers, numberOfOutgoingTransfers;
        uint32 latestIncomingTransferTick, latestOutgoingTransferTick;
    };
}
"""

CONTRACT_DEF = """\
#define QX_CONTRACT_INDEX 1
#define CONTRACT_INDEX QX_CONTRACT_INDEX
#define CONTRACT_STATE_TYPE QX
#define CONTRACT_STATE2_TYPE QX2
#include "contracts/Qx.h"

#undef CONTRACT_INDEX
#undef CONTRACT_STATE_TYPE
#undef CONTRACT_STATE2_TYPE

#define QUTIL_CONTRACT_INDEX 4
#define CONTRACT_INDEX QUTIL_CONTRACT_INDEX
#define CONTRACT_STATE_TYPE QUTIL
#define CONTRACT_STATE2_TYPE QUTIL2
#include "contracts/QUtil.h"
"""

QX_HEADER = """\
using namespace QPI;

struct QX : public ContractBase
{
    struct Fees_input
    {
    };
    struct Fees_output
    {
        uint32 assetIssuanceFee;
        uint32 transferFee;
        uint32 tradeFee;
    };

    struct TransferShareOwnershipAndPossession_input
    {
        id issuer;
        id newOwnerAndPossessor;
        uint64 assetName;
        sint64 numberOfShares;
    };
    struct TransferShareOwnershipAndPossession_output
    {
        sint64 transferredNumberOfShares;
    };

    REGISTER_USER_FUNCTIONS_AND_PROCEDURES()
    {
        REGISTER_USER_FUNCTION(Fees, 1);
        REGISTER_USER_PROCEDURE(TransferShareOwnershipAndPossession, 2);
    }
};
"""


@pytest.fixture(scope="session")
def qutil_header() -> str:
    """A QUtil-like contract header with functions, procedures and nested structs."""
    return QUTIL_HEADER


@pytest.fixture(scope="session")
def qpi_prelude() -> str:
    """A minimal qpi.h prelude."""
    return QPI_PRELUDE


@pytest.fixture(scope="session")
def contract_def_source() -> str:
    """A contract_def.h excerpt registering Qx (index 1) and QUtil (index 4)."""
    return CONTRACT_DEF


@pytest.fixture
def contracts_tree(tmp_path: Path) -> Path:
    """
    Create a core source tree on disk.

    Layout::

        core/src/contract_core/contract_def.h
        core/src/contracts/{qpi.h, QUtil.h, Qx.h, Unregistered.h, helper.h}
    """
    root = tmp_path / "core" / "src"
    contract_core = root / "contract_core"
    contracts = root / "contracts"
    contract_core.mkdir(parents=True)
    contracts.mkdir(parents=True)

    (contract_core / "contract_def.h").write_text(CONTRACT_DEF, encoding="utf-8")
    (contracts / "qpi.h").write_text(QPI_PRELUDE, encoding="utf-8")
    (contracts / "QUtil.h").write_text(QUTIL_HEADER, encoding="utf-8")
    (contracts / "Qx.h").write_text(QX_HEADER, encoding="utf-8")
    (contracts / "Unregistered.h").write_text(
        "struct UNREG { struct Ping_input { uint8 v; }; };\n"
        "REGISTER_USER_FUNCTION(Ping, 1);\n",
        encoding="utf-8",
    )
    (contracts / "helper.h").write_text("// not a contract\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Give every test an uninitialized logging system."""
    LoggerSetup.reset()
    yield
    LoggerSetup.reset()
